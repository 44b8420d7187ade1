from __future__ import annotations

import unittest

from movingimages_core.objectid import (
    ObjectIdentifierError,
    ObjectType,
    make_objectid,
    makeid_withfilterindex,
    makeid_withfilternameid,
    makeid_withobjecttypeandname,
)


class ObjectIdentifierTests(unittest.TestCase):
    def test_reference_wins_over_everything(self) -> None:
        object_id = make_objectid(objectreference=7, objecttype="bitmapcontext", objectname="ignored")
        self.assertEqual(object_id, {"objectreference": 7})

    def test_name_wins_over_index(self) -> None:
        object_id = make_objectid(objecttype=ObjectType.IMAGE_IMPORTER, objectname="photo", objectindex=3)
        self.assertEqual(object_id, {"objecttype": "imageimporter", "objectname": "photo"})

    def test_type_with_index(self) -> None:
        self.assertEqual(
            make_objectid(objecttype="pdfcontext", objectindex=0),
            {"objecttype": "pdfcontext", "objectindex": 0},
        )

    def test_type_alone_is_unresolvable(self) -> None:
        with self.assertRaises(ObjectIdentifierError):
            make_objectid(objecttype="bitmapcontext")

    def test_nothing_is_unresolvable(self) -> None:
        with self.assertRaises(ObjectIdentifierError):
            make_objectid()

    def test_unknown_object_type_is_rejected(self) -> None:
        with self.assertRaises(ObjectIdentifierError):
            makeid_withobjecttypeandname("teapot", "name")

    def test_filter_identifiers(self) -> None:
        self.assertEqual(makeid_withfilternameid("blur"), {"mifiltername": "blur"})
        self.assertEqual(makeid_withfilterindex("2"), {"cifilterindex": 2})


if __name__ == "__main__":
    unittest.main()
