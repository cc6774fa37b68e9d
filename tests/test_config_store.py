"""Unit tests for ConfigStore queries."""

import unittest
from unittest.mock import MagicMock
from mdconf.config.loader import ConfigLoader
from mdconf.config.matcher import Ambiguous
from mdconf.config.store import ConfigStore
from mdconf.uuid_util import parse_uuid

CONF = """
DEVICE /dev/sd* /dev/hd[ab]1
ARRAY /dev/md0 UUID=a1b2c3d4:00112233:44556677:8899aabb
ARRAY /dev/md/home name=home super-minor=5
ARRAY /dev/md2 name=mirror
ARRAY /dev/md3 name=mirror
MAILADDR root@example.com
MAILFROM mdadm monitor
PROGRAM /usr/sbin/handle-event
HOMEHOST box
AUTO +ddf -0.90 homehost -all
"""


def load(txt: str) -> ConfigStore:
    return ConfigLoader(log_func=MagicMock()).load_text(txt)


class TestConfigStore(unittest.TestCase):
    """Test ConfigStore accessors."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.store = load(CONF)

    def test_scalars(self) -> None:
        """Test mail, program and homehost."""
        self.assertEqual(self.store.get_mail_address(), "root@example.com")
        self.assertEqual(self.store.get_mail_from(), "mdadm monitor")
        self.assertEqual(self.store.get_alert_program(), "/usr/sbin/handle-event")
        self.assertEqual(self.store.get_homehost(), ("box", True))
        self.assertEqual(self.store.get_create_defaults().mode, 0o600)
        self.assertEqual(self.store.device_patterns, ("/dev/sd*", "/dev/hd[ab]1"))

    def test_empty_store(self) -> None:
        """Test accessors of an empty configuration."""
        st = ConfigStore()
        self.assertIsNone(st.get_mail_address())
        self.assertIsNone(st.get_mail_from())
        self.assertIsNone(st.get_alert_program())
        self.assertEqual(st.get_homehost(), (None, True))
        self.assertIsNone(st.find_identity_for("/dev/md0"))
        self.assertTrue(st.is_device_allowed("/dev/anything"))
        self.assertTrue(st.is_format_auto_allowed("0.90", False))
        self.assertTrue(st.is_name_available("md0"))

    def test_is_device_allowed(self) -> None:
        """Test DEVICE patterns gate devices."""
        self.assertTrue(self.store.is_device_allowed("/dev/sdb1"))
        self.assertTrue(self.store.is_device_allowed("/dev/hda1"))
        self.assertFalse(self.store.is_device_allowed("/dev/hdc1"))
        self.assertFalse(self.store.is_device_allowed("/dev/nvme0n1"))

    def test_device_gate_example(self) -> None:
        """Test a single glob, and no DEVICE line at all."""
        st = load("DEVICE /dev/sd*\n")
        self.assertFalse(st.is_device_allowed("/dev/hda1"))
        self.assertTrue(st.is_device_allowed("/dev/sdb1"))
        self.assertTrue(load("MAILADDR x\n").is_device_allowed("/dev/hda1"))

    def test_partitions_allows_all(self) -> None:
        """Test the partitions keyword allows anything."""
        st = load("DEVICE /dev/sda PARTITIONS\n")
        self.assertTrue(st.is_device_allowed("/dev/nvme0n1p1"))

    def test_containers_is_not_a_glob(self) -> None:
        """Test containers alone does not allow arbitrary devices."""
        st = load("DEVICE containers\n")
        self.assertFalse(st.is_device_allowed("/dev/sda"))

    def test_find_identity_for(self) -> None:
        """Test lookup by md device name."""
        ident = self.store.find_identity_for("md0")
        self.assertEqual(ident.devname, "/dev/md0")
        self.assertEqual(self.store.find_identity_for("/dev/md/home").name, "home")
        self.assertEqual(self.store.find_identity_for("home").name, "home")
        self.assertIsNone(self.store.find_identity_for("/dev/md9"))
        self.assertEqual(self.store.find_identity_for(None).devname, "/dev/md0")

    def test_match_discovered_array(self) -> None:
        """Test the matcher through the store."""
        uuid = parse_uuid("a1b2c3d4:00112233:44556677:8899aabb")
        ret = self.store.match_discovered_array(uuid, "whatever", 0)
        self.assertEqual(ret.devname, "/dev/md0")
        ret = self.store.match_discovered_array(None, "HOME", 5)
        self.assertEqual(ret.devname, "/dev/md/home")
        self.assertIsNone(self.store.match_discovered_array(None, "home", 4))

    def test_match_ambiguous(self) -> None:
        """Test two ARRAY lines with the same name."""
        ret = self.store.match_discovered_array(None, "mirror", None)
        self.assertIsInstance(ret, Ambiguous)
        self.assertEqual([x.devname for x in ret.candidates], ["/dev/md2", "/dev/md3"])

    def test_is_format_auto_allowed(self) -> None:
        """Test the AUTO line."""
        self.assertTrue(self.store.is_format_auto_allowed("ddf", False))
        self.assertFalse(self.store.is_format_auto_allowed("0.90", True))
        self.assertTrue(self.store.is_format_auto_allowed("1.x", True))
        self.assertFalse(self.store.is_format_auto_allowed("1.x", False))

    def test_is_name_available(self) -> None:
        """Test names taken by devname, name= or super-minor=."""
        self.assertFalse(self.store.is_name_available("/dev/md0"))
        self.assertFalse(self.store.is_name_available("0"))
        self.assertFalse(self.store.is_name_available("home"))
        self.assertFalse(self.store.is_name_available("/dev/md5"))
        self.assertFalse(self.store.is_name_available("mirror"))
        self.assertTrue(self.store.is_name_available("/dev/md7"))
        self.assertTrue(self.store.is_name_available("/dev/md/data"))

    def test_repeated_queries(self) -> None:
        """Test queries give the same answer every time."""
        for _ in range(3):
            self.assertEqual(self.store.get_mail_address(), "root@example.com")
            self.assertEqual(len(self.store.identities), 4)
            self.assertIs(self.store.find_identity_for("md0"), self.store.identities[0])


if __name__ == "__main__":
    unittest.main()
