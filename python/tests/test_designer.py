import json
import math
import pathlib
import sys
import unittest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from speakerbox_core import (
    DriverParameters,
    EnclosureDesigner,
    EnclosureTopology,
    Ported,
    Sealed,
    UnsupportedTopologyError,
    WarningKind,
    design,
    recommend,
)


class RecommendationTest(unittest.TestCase):
    def test_thresholds(self) -> None:
        self.assertEqual(recommend(0.39), "Ported")
        self.assertEqual(recommend(0.4), "Sealed")
        self.assertEqual(recommend(0.5), "Sealed")
        self.assertEqual(recommend(0.6), "Sealed")
        self.assertEqual(recommend(0.61), "Other")

    def test_nan_is_not_classified(self) -> None:
        self.assertEqual(recommend(float("nan")), "Other")

    def test_designer_method_matches_function(self) -> None:
        designer = EnclosureDesigner()
        for qts in (0.2, 0.45, 0.9):
            self.assertEqual(designer.recommend(qts), recommend(qts))


class EnclosureDesignerTest(unittest.TestCase):
    def setUp(self) -> None:
        self.driver = DriverParameters(
            fs_hz=30.0,
            qts=0.4,
            vas_l=50.0,
            re_ohm=6.2,
            sd_cm2=300.0,
            xmax_mm=8.0,
            vd_l=0.01,
        )
        self.designer = EnclosureDesigner()

    def test_topology_accepted_in_every_form(self) -> None:
        by_name = self.designer.design(self.driver, "Sealed")
        by_enum = self.designer.design(self.driver, EnclosureTopology.SEALED)
        by_config = self.designer.design(self.driver, Sealed())
        self.assertEqual(by_name, by_enum)
        self.assertEqual(by_name, by_config)

    def test_options_select_tuning(self) -> None:
        from_options = self.designer.design(self.driver, "Ported", {"fb": 20.0})
        from_config = self.designer.design(self.driver, Ported(fb_hz=20.0))
        self.assertEqual(from_options, from_config)
        self.assertEqual(from_options.tuning_hz, 20.0)

    def test_unrecognised_options_ignored(self) -> None:
        plain = self.designer.design(self.driver, "Sealed")
        noisy = self.designer.design(self.driver, "Sealed", {"fb": 99.0, "unused": 1.0})
        self.assertEqual(plain, noisy)

    def test_repeat_calls_are_identical(self) -> None:
        for topology in EnclosureTopology:
            with self.subTest(topology=topology.value):
                first = design(self.driver, topology)
                second = design(self.driver, topology)
                self.assertEqual(first, second)

    def test_unknown_topology_raises(self) -> None:
        for topology in ("Horn", "", 42):
            with self.subTest(topology=topology):
                with self.assertRaises(UnsupportedTopologyError) as caught:
                    self.designer.design(self.driver, topology)  # type: ignore[arg-type]
                self.assertEqual(caught.exception.topology, topology)

    def test_unknown_topology_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            design(self.driver, "Horn")

    def test_empty_driver_never_raises(self) -> None:
        empty = DriverParameters()
        for topology in EnclosureTopology:
            with self.subTest(topology=topology.value):
                result = self.designer.design(empty, topology)
                self.assertEqual(result.topology, topology.value)
                self.assertTrue(result.warnings)
                self.assertFalse(result.is_feasible)
                for value in (
                    result.net_volume_l,
                    result.gross_volume_l,
                    result.tuning_hz,
                    result.port_length_cm,
                    result.width_cm,
                ):
                    self.assertTrue(math.isfinite(value))

    def test_nan_parameters_reported(self) -> None:
        driver = DriverParameters(fs_hz=float("nan"), qts=0.4, vas_l=50.0)
        result = self.designer.design(driver, "Sealed")
        self.assertEqual(result.warning_kinds, (WarningKind.INVALID_DRIVER_PARAMETER,))
        self.assertTrue(math.isfinite(result.net_volume_l))

    def test_cabinet_proportions(self) -> None:
        for topology in EnclosureTopology:
            with self.subTest(topology=topology.value):
                result = self.designer.design(self.driver, topology, {"fb": 20.0, "delta": 1.0})
                if result.net_volume_l <= 0.0:
                    continue
                cube_root = (result.net_volume_l * 1000.0) ** (1.0 / 3.0)
                self.assertAlmostEqual(result.width_cm, cube_root, places=9)
                self.assertAlmostEqual(result.height_cm, 1.6 * result.width_cm, places=9)
                self.assertAlmostEqual(result.depth_cm, 0.6 * result.width_cm, places=9)

    def test_net_volume_accounts_for_displacements(self) -> None:
        result = self.designer.design(self.driver, "PassiveRadiator")
        self.assertAlmostEqual(result.net_volume_l, result.gross_volume_l - 0.01 - 0.5, places=12)

    def test_excess_displacement_flags_xmax(self) -> None:
        driver = DriverParameters(fs_hz=30.0, qts=0.4, vas_l=50.0, sd_cm2=300.0, xmax_mm=8.0, vd_l=5.0)
        result = self.designer.design(driver, "Sealed")
        self.assertFalse(result.within_xmax)
        self.assertTrue(self.designer.design(self.driver, "Sealed").within_xmax)

    def test_result_serialises_to_plain_types(self) -> None:
        payload = self.designer.design(self.driver, "Bandpass").to_dict()
        self.assertEqual(payload["topology"], "Bandpass")
        self.assertIsInstance(payload["warnings"], list)
        self.assertEqual(len(payload["chamber_volumes_l"]), 2)

    def test_results_and_warnings_are_hashable(self) -> None:
        result = self.designer.design(self.driver, "Ported", {"fb": 25.0})
        self.assertTrue(result.has_warning(WarningKind.NON_PHYSICAL_PORT))
        self.assertEqual(hash(result), hash(self.designer.design(self.driver, "Ported", {"fb": 25.0})))
        warning = result.warnings[0]
        self.assertIsInstance(warning.details, tuple)
        self.assertEqual(dict(warning.details), warning.to_dict()["details"])
        self.assertEqual(len({warning, warning}), 1)

    def test_extreme_parameters_serialise_as_strict_json(self) -> None:
        drivers = (
            DriverParameters(fs_hz=30.0, qts=1e-200, vas_l=50.0),
            DriverParameters(fs_hz=30.0, qts=0.4, vas_l=1e308),
            DriverParameters(fs_hz=1e308, qts=0.2, vas_l=50.0),
            DriverParameters(fs_hz=float("inf"), qts=0.4, vas_l=float("inf")),
        )
        for driver in drivers:
            for topology in EnclosureTopology:
                with self.subTest(driver=driver, topology=topology.value):
                    result = self.designer.design(driver, topology, {"fb": 20.0, "qtc": 0.41})
                    json.dumps(result.to_dict(), allow_nan=False)


if __name__ == "__main__":
    unittest.main()
