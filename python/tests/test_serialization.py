import pathlib
import sys
import unittest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from speakerbox_core import (
    DriverParameters,
    dataclass_schema,
    design_request_schema,
    design_response_schema,
    designer_json_schemas,
    recommend_request_schema,
    recommend_response_schema,
)


class SchemaExportTests(unittest.TestCase):
    def test_driver_schema_lists_every_parameter(self) -> None:
        schema = dataclass_schema(DriverParameters)
        self.assertEqual(schema["type"], "object")
        self.assertEqual(schema["required"], [])
        self.assertEqual(len(schema["properties"]), 11)
        self.assertEqual(schema["properties"]["fs_hz"]["type"], "number")
        self.assertIn("description", schema["properties"]["xmax_mm"])

    def test_non_dataclass_rejected(self) -> None:
        with self.assertRaises(TypeError):
            dataclass_schema(dict)

    def test_design_request_schema_structure(self) -> None:
        schema = design_request_schema()
        self.assertEqual(schema["title"], "EnclosureDesignRequest")
        self.assertEqual(schema["required"], ["driver", "topology"])
        topology = schema["properties"]["topology"]
        self.assertEqual(
            topology["enum"], ["Sealed", "Ported", "Bandpass", "TransmissionLine", "PassiveRadiator"]
        )
        options = schema["properties"]["options"]
        self.assertEqual(options["additionalProperties"]["type"], "number")
        for key in ("qtc", "fb", "s", "tr", "delta"):
            self.assertIn(key, options["description"])

    def test_design_response_schema_fields(self) -> None:
        schema = design_response_schema()
        self.assertEqual(schema["title"], "EnclosureDesignResponse")
        self.assertEqual(schema["required"], ["topology"])
        props = schema["properties"]
        self.assertEqual(props["within_xmax"]["type"], "boolean")
        self.assertEqual(props["port_length_cm"]["minimum"], 0.0)
        self.assertEqual(props["width_cm"]["minimum"], 0.0)
        alpha = props["alignment_alpha"]
        self.assertIn("anyOf", alpha)
        self.assertTrue(any(option.get("type") == "null" for option in alpha["anyOf"]))
        chambers = props["chamber_volumes_l"]
        self.assertEqual(chambers["type"], "array")
        self.assertEqual(chambers["items"]["type"], "number")

    def test_warning_items_carry_closed_kinds(self) -> None:
        warnings = design_response_schema()["properties"]["warnings"]
        self.assertEqual(warnings["type"], "array")
        item = warnings["items"]
        self.assertEqual(item["required"], ["kind", "message"])
        self.assertIn("infeasible_alignment", item["properties"]["kind"]["enum"])
        self.assertIn("negative_net_volume", item["properties"]["kind"]["enum"])

    def test_recommend_schemas(self) -> None:
        request = recommend_request_schema()
        self.assertEqual(request["required"], ["qts"])
        response = recommend_response_schema()
        self.assertEqual(
            response["properties"]["recommendation"]["enum"], ["Sealed", "Ported", "Other"]
        )

    def test_catalog_lists_both_operations(self) -> None:
        catalog = designer_json_schemas()
        self.assertEqual(set(catalog), {"design", "recommend"})
        self.assertIn("request", catalog["design"])
        self.assertEqual(
            catalog["recommend"]["response"]["title"],
            "TopologyRecommendationResponse",
        )


if __name__ == "__main__":
    unittest.main()
