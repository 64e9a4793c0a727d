import dataclasses
import math
import pathlib
import sys
import unittest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from speakerbox_core import DriverParameters


class DriverParameterTest(unittest.TestCase):
    def setUp(self) -> None:
        self.driver = DriverParameters(
            fs_hz=32.0,
            qts=0.35,
            vas_l=95.0,
            re_ohm=5.4,
            sd_cm2=820.0,
            xmax_mm=12.0,
            le_mh=0.7,
            cms_m_per_n=0.00024,
            mms_g=104.0,
            bl_t_m=16.2,
        )

    def test_defaults_are_zero(self) -> None:
        blank = DriverParameters()
        for value in blank.to_dict().values():
            self.assertEqual(value, 0.0)
        self.assertEqual(len(blank.to_dict()), 11)

    def test_parameters_are_immutable(self) -> None:
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.driver.fs_hz = 40.0  # type: ignore[misc]

    def test_linear_displacement(self) -> None:
        self.assertAlmostEqual(self.driver.linear_displacement_l(), 820.0 * 12.0 / 1000.0)

    def test_with_derived_displacement_fills_missing_vd(self) -> None:
        derived = self.driver.with_derived_displacement()
        self.assertAlmostEqual(derived.vd_l, 9.84)
        self.assertEqual(self.driver.vd_l, 0.0)

    def test_with_derived_displacement_keeps_explicit_vd(self) -> None:
        explicit = dataclasses.replace(self.driver, vd_l=0.25)
        self.assertIs(explicit.with_derived_displacement(), explicit)

    def test_invalid_fields_flags_zero_negative_and_nan(self) -> None:
        driver = DriverParameters(fs_hz=0.0, qts=-0.3, vas_l=math.nan, re_ohm=4.0)
        self.assertEqual(
            driver.invalid_fields(["fs_hz", "qts", "vas_l", "re_ohm"]),
            ["fs_hz", "qts", "vas_l"],
        )


if __name__ == "__main__":
    unittest.main()
