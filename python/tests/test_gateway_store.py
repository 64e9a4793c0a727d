from __future__ import annotations

import os
import tempfile
import unittest

from services.gateway.app.store import DesignStore


class DesignStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.NamedTemporaryFile(delete=False)
        self._tmp.close()
        self.store = DesignStore(self._tmp.name)

    def tearDown(self) -> None:
        try:
            os.remove(self._tmp.name)
        except FileNotFoundError:
            pass

    def test_save_and_fetch(self) -> None:
        record = self.store.save_design(
            "Sealed", {"fs_hz": 30.0, "qts": 0.4}, {"qtc": 0.707}, {"net_volume_l": 23.03}
        )
        fetched = self.store.get_design(record.id)
        self.assertIsNotNone(fetched)
        assert fetched is not None
        self.assertEqual(fetched.topology, "Sealed")
        self.assertAlmostEqual(fetched.driver["fs_hz"], 30.0)
        self.assertEqual(fetched.options, {"qtc": 0.707})
        self.assertEqual(fetched.result, {"net_volume_l": 23.03})

    def test_missing_design_returns_none(self) -> None:
        self.assertIsNone(self.store.get_design("does-not-exist"))

    def test_rejects_unknown_topology(self) -> None:
        with self.assertRaises(ValueError):
            self.store.save_design("Horn", {}, {}, {})

    def test_list_designs_returns_newest_first(self) -> None:
        first = self.store.save_design("Sealed", {}, {}, {})
        second = self.store.save_design("Ported", {}, {}, {})
        designs = self.store.list_designs()
        self.assertGreaterEqual(len(designs), 2)
        self.assertEqual(designs[0].id, second.id)
        self.assertEqual(designs[1].id, first.id)
        self.assertEqual(len(self.store.list_designs(limit=1)), 1)

    def test_list_designs_with_topology_filter(self) -> None:
        sealed = self.store.save_design("Sealed", {}, {}, {})
        ported = self.store.save_design("Ported", {}, {}, {})

        sealed_designs = self.store.list_designs(topology="Sealed")
        self.assertTrue(any(design.id == sealed.id for design in sealed_designs))
        self.assertFalse(any(design.id == ported.id for design in sealed_designs))

        with self.assertRaises(ValueError):
            self.store.list_designs(topology="bogus")

    def test_topology_counts_includes_all_topologies(self) -> None:
        self.store.save_design("Sealed", {}, {}, {})
        self.store.save_design("Sealed", {}, {}, {})
        self.store.save_design("Bandpass", {}, {}, {})

        counts = self.store.topology_counts()
        self.assertEqual(counts["Sealed"], 2)
        self.assertEqual(counts["Bandpass"], 1)
        self.assertEqual(counts["Ported"], 0)
        self.assertEqual(counts["TransmissionLine"], 0)

    def test_delete_all(self) -> None:
        self.store.save_design("PassiveRadiator", {}, {}, {})
        self.store.delete_all()
        self.assertEqual(self.store.list_designs(), [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
