import pathlib
import sys
import unittest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from speakerbox_core import (
    Bandpass,
    DriverParameters,
    EnclosureTopology,
    PassiveRadiator,
    Ported,
    Sealed,
    TransmissionLine,
    UnsupportedTopologyError,
    parse_topology,
    resolve_topology,
)


class TopologyResolutionTest(unittest.TestCase):
    def test_defaults_resolved_at_boundary(self) -> None:
        self.assertEqual(resolve_topology("Sealed"), Sealed(qtc=0.707))
        self.assertEqual(resolve_topology("Ported"), Ported(fb_hz=None))
        self.assertEqual(resolve_topology("Bandpass"), Bandpass(s=0.6))
        self.assertEqual(resolve_topology("TransmissionLine"), TransmissionLine(taper_ratio=1.0))
        self.assertEqual(resolve_topology("PassiveRadiator"), PassiveRadiator(delta=1.0))

    def test_options_select_per_topology_keys(self) -> None:
        options = {"qtc": 0.9, "fb": 25.0, "s": 0.5, "tr": 0.1, "delta": 2.0, "bogus": 7.0}
        self.assertEqual(resolve_topology(EnclosureTopology.SEALED, options), Sealed(qtc=0.9))
        self.assertEqual(resolve_topology(EnclosureTopology.PORTED, options), Ported(fb_hz=25.0))
        self.assertEqual(resolve_topology(EnclosureTopology.BANDPASS, options), Bandpass(s=0.5))
        self.assertEqual(
            resolve_topology(EnclosureTopology.TRANSMISSION_LINE, options),
            TransmissionLine(taper_ratio=0.1),
        )
        self.assertEqual(
            resolve_topology(EnclosureTopology.PASSIVE_RADIATOR, options),
            PassiveRadiator(delta=2.0),
        )

    def test_foreign_option_keys_are_ignored(self) -> None:
        self.assertEqual(resolve_topology("Sealed", {"fb": 40.0}), Sealed())

    def test_config_instances_pass_through(self) -> None:
        config = Bandpass(s=0.45)
        self.assertIs(resolve_topology(config, {"s": 0.9}), config)

    def test_ported_tuning_falls_back_to_fs(self) -> None:
        driver = DriverParameters(fs_hz=28.0)
        self.assertEqual(Ported().tuning_hz(driver), 28.0)
        self.assertEqual(Ported(fb_hz=22.0).tuning_hz(driver), 22.0)

    def test_parse_topology_is_lenient_about_spelling(self) -> None:
        self.assertIs(parse_topology("transmission-line"), EnclosureTopology.TRANSMISSION_LINE)
        self.assertIs(parse_topology("Passive Radiator"), EnclosureTopology.PASSIVE_RADIATOR)
        self.assertIs(parse_topology("PORTED"), EnclosureTopology.PORTED)
        self.assertIs(parse_topology(EnclosureTopology.SEALED), EnclosureTopology.SEALED)

    def test_unknown_topology_raises(self) -> None:
        with self.assertRaises(UnsupportedTopologyError):
            parse_topology("Horn")
        with self.assertRaises(UnsupportedTopologyError):
            resolve_topology(3)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            resolve_topology("isobaric")


if __name__ == "__main__":
    unittest.main()
