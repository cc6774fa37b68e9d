import argparse
import sys
from typing import List, Optional

from .__init__ import CONFFILE, CONFFILE2, ENV_CONFFILE, S_VERSION
from .config import DEFAULT_REGISTRY, Ambiguous, ConfigLoader, ConfigStore, DeviceLister
from .uuid_util import fmt_uuid, parse_uuid
from .util import LogBridge, NotUTF8, setup_logging


def dump(store: ConfigStore) -> None:
    print("# source: %s" % (store.source or "(none)",))
    for zs in store.devices:
        print("DEVICE %s" % (zs,))

    for ident in store.identities:
        print("ARRAY %s" % (describe(ident),))

    print("CREATE %r" % (store.create,))
    for k, v in (
        ("MAILADDR", store.mailaddr),
        ("MAILFROM", store.mailfrom),
        ("PROGRAM", store.program),
        ("HOMEHOST", store.homehost),
    ):
        if v is not None:
            print("%s %s" % (k, v))

    if not store.require_homehost:
        print("HOMEHOST <ignore>")

    if store.auto_options is not None:
        print("AUTO %s" % (" ".join(store.auto_options),))


def describe(ident) -> str:
    ret = [ident.devname or "<none>"]
    if ident.uuid is not None:
        ret.append("uuid=" + fmt_uuid(ident.uuid))
    for k, zs in (
        ("name", ident.name),
        ("super-minor", ident.super_minor),
        ("devices", ident.devices),
        ("spare-group", ident.spare_group),
        ("metadata", ident.metadata and ident.metadata.name),
        ("container", ident.container),
        ("member", ident.member),
    ):
        if zs is not None:
            ret.append("%s=%s" % (k, zs))
    return " ".join(ret)


def run(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        prog="mdconf",
        description="inspect an md array configuration file",
        epilog="without -c, $%s is used, then %s, then %s"
        % (ENV_CONFFILE, CONFFILE, CONFFILE2),
    )
    ap.add_argument("-c", metavar="FILE", dest="config", help="config file, or 'none' / 'partitions'")
    ap.add_argument("-v", action="store_true", help="show debug messages")
    ap.add_argument("-q", action="store_true", help="only show errors")
    ap.add_argument("--strict", action="store_true", help="fail on a config file that is not UTF-8")
    ap.add_argument("--version", action="version", version="mdconf " + S_VERSION)
    sub = ap.add_subparsers(dest="cmd")

    sub.add_parser("dump", help="print the parsed configuration")
    sub.add_parser("devices", help="list devices the DEVICE lines refer to")

    sap = sub.add_parser("test-dev", help="fail unless every device is allowed by DEVICE lines")
    sap.add_argument("devs", metavar="DEV", nargs="+")

    sap = sub.add_parser("auto", help="fail unless FORMAT may be auto-assembled")
    sap.add_argument("format", metavar="FORMAT", help="e.g. %s" % (", ".join(DEFAULT_REGISTRY.names()),))
    sap.add_argument("--homehost", action="store_true", help="the array belongs to this host")

    sap = sub.add_parser("ident", help="show the ARRAY line for an md device")
    sap.add_argument("dev", metavar="DEV")

    sap = sub.add_parser("match", help="match array attributes against ARRAY lines")
    sap.add_argument("--uuid")
    sap.add_argument("--name")
    sap.add_argument("--super-minor", type=int)
    sap.add_argument("--device", help="component device the array was found on")
    sap.add_argument("--swapuuid", action="store_true")

    args = ap.parse_args(argv)
    setup_logging(args.v, args.q)
    log = LogBridge("mdconf")

    loader = ConfigLoader(args.config, LogBridge("mdconf.config"), strict=args.strict)
    try:
        store = loader.load()
    except NotUTF8:
        return 1

    cmd = args.cmd or "dump"

    if cmd == "dump":
        dump(store)
        return 0

    if cmd == "devices":
        for zs in DeviceLister(log).get_devs(store):
            print(zs)
        return 0

    if cmd == "test-dev":
        rc = 0
        for zs in args.devs:
            ok = store.is_device_allowed(zs)
            print("%s: %s" % (zs, "allowed" if ok else "not allowed"))
            if not ok:
                rc = 1
        return rc

    if cmd == "auto":
        ok = store.is_format_auto_allowed(args.format, args.homehost)
        print("%s: %s" % (args.format, "auto" if ok else "no auto"))
        return 0 if ok else 1

    if cmd == "ident":
        ident = store.find_identity_for(args.dev)
        if not ident:
            print("%s: not in config" % (args.dev,))
            return 1
        print(describe(ident))
        return 0

    uuid = None
    if args.uuid:
        uuid = parse_uuid(args.uuid)
        if uuid is None:
            ap.error("bad uuid: %s" % (args.uuid,))

    ret = store.match_discovered_array(
        uuid, args.name, args.super_minor, args.device, args.swapuuid
    )
    if isinstance(ret, Ambiguous):
        for ident in ret.candidates:
            print("ambiguous: %s" % (describe(ident),))
        return 2

    if ret is None:
        print("no match")
        return 1

    print(describe(ret))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
