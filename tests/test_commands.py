from __future__ import annotations

import unittest

from movingimages_core.commands import (
    Command,
    CommandVerb,
    make_add_metadata,
    make_addimage,
    make_assignimage_tocollection,
    make_calculategraphicsizeoftext,
    make_closeall,
    make_copymetadata,
    make_createbitmapcontext,
    make_createexporter,
    make_createpdfcontext,
    make_createwindowcontext,
    make_drawelement,
    make_get_objectproperties,
    make_getnonobjectproperty,
    make_getpixeldata,
    make_processframes,
    make_removeimage_fromcollection,
    make_set_objectproperties,
    make_snapshot,
)
from movingimages_core.documents import DocumentValidationError
from movingimages_core.geometry import make_rectangle, make_size
from movingimages_core.objectid import ObjectIdentifierError, makeid_withobjecttypeandname
from movingimages_draw.elements import DrawElement, ElementType


class CommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self.bitmap = makeid_withobjecttypeandname("bitmapcontext", "canvas")
        self.exporter = makeid_withobjecttypeandname("imageexporter", "out")
        self.importer = makeid_withobjecttypeandname("imageimporter", "in")

    def test_unknown_verb_is_rejected(self) -> None:
        with self.assertRaises(DocumentValidationError):
            Command("explode")

    def test_add_option_overwrites_existing_key(self) -> None:
        command = Command(CommandVerb.EXPORT).add_option("flag", 1).add_option("flag", 2)
        self.assertEqual(command.to_document(), {"command": "export", "flag": 2})

    def test_create_bitmapcontext_key_order(self) -> None:
        document = make_createbitmapcontext(size=make_size(10, 20), name="canvas").to_document()
        self.assertEqual(list(document), ["command", "objecttype", "objectname", "size", "preset"])
        self.assertEqual(document["preset"], "AlphaPreMulFirstRGB8bpcInt")

    def test_create_windowcontext_uses_convenience_fields_without_rect(self) -> None:
        document = make_createwindowcontext(width=300, height=200, name="win").to_document()
        self.assertEqual(document["objecttype"], "nsgraphicscontext")
        self.assertEqual((document["width"], document["height"], document["x"], document["y"]), (300, 200, 100, 100))
        self.assertFalse(document["borderlesswindow"])

    def test_create_pdfcontext(self) -> None:
        document = make_createpdfcontext(size=make_size(), filepath="/tmp/out.pdf", name="doc").to_document()
        self.assertEqual(list(document), ["command", "objecttype", "size", "objectname", "file"])

    def test_create_exporter_defaults_to_jpeg(self) -> None:
        document = make_createexporter("/tmp/out.jpg").to_document()
        self.assertEqual(document["utifiletype"], "public.jpeg")
        self.assertNotIn("objectname", document)

    def test_nonobject_property_for_class(self) -> None:
        document = make_getnonobjectproperty("numberofobjects", objecttype="imageimporter").to_document()
        self.assertEqual(
            document, {"command": "getproperty", "propertykey": "numberofobjects", "objecttype": "imageimporter"}
        )
        with self.assertRaises(ObjectIdentifierError):
            make_getnonobjectproperty(objecttype="nope")

    def test_text_size_inputdata(self) -> None:
        document = make_calculategraphicsizeoftext("Hi", userinterfacefont="kCTFontUIFontSystem", fontsize=12).to_document()
        self.assertEqual(
            document["inputdata"], {"stringtext": "Hi", "userinterfacefont": "kCTFontUIFontSystem", "fontsize": 12}
        )

    def test_get_objectproperties_uses_plural_verb(self) -> None:
        self.assertEqual(make_get_objectproperties(self.importer, imageindex=0).to_document()["command"], "getproperties")

    def test_set_objectproperties(self) -> None:
        document = make_set_objectproperties(self.exporter, {"exportcompressionquality": 0.8}, imageindex=0).to_document()
        self.assertEqual(document["propertiesdictionary"], {"exportcompressionquality": 0.8})
        self.assertEqual(document["receiverobject"], self.exporter)

    def test_copymetadata_is_add_metadata(self) -> None:
        self.assertIs(make_copymetadata, make_add_metadata)
        document = make_add_metadata(self.exporter, self.importer).to_document()
        self.assertEqual(document["secondaryobject"], self.importer)
        self.assertEqual(document["secondaryimageindex"], 0)

    def test_addimage_with_index(self) -> None:
        document = make_addimage(self.exporter, self.bitmap, imageindex=2).to_document()
        self.assertEqual(document["secondaryimageindex"], 2)

    def test_drawelement_expands_builder(self) -> None:
        element = DrawElement(ElementType.FILL_RECTANGLE).set_rectangle(make_rectangle())
        element.set_fillcolor({"red": 1, "green": 0, "blue": 0, "alpha": 1})
        document = make_drawelement(self.bitmap, element).to_document()
        self.assertEqual(document["drawinstructions"]["elementtype"], "fillrectangle")

    def test_snapshot_validates_action(self) -> None:
        self.assertEqual(make_snapshot(self.bitmap, "drawsnapshot").to_document()["snapshotaction"], "drawsnapshot")
        with self.assertRaises(DocumentValidationError):
            make_snapshot(self.bitmap, "blur")

    def test_getpixeldata_carries_rectangle(self) -> None:
        document = make_getpixeldata(self.bitmap, make_rectangle(), savelocation="/tmp/p.json").to_document()
        self.assertEqual(document["rectangle"], make_rectangle())
        self.assertEqual(document["saveresultstype"], "jsonfile")
        self.assertEqual(document["saveresultsto"], "/tmp/p.json")

    def test_closeall(self) -> None:
        self.assertEqual(make_closeall().to_document(), {"command": "closeall"})
        self.assertEqual(make_closeall("pdfcontext").to_document()["objecttype"], "pdfcontext")

    def test_collection_commands(self) -> None:
        assign = make_assignimage_tocollection(self.bitmap, "frame").to_document()
        self.assertEqual(assign, {"command": "assignimagetocollection", "sourceobject": self.bitmap, "imageidentifier": "frame"})
        remove = make_removeimage_fromcollection("frame").to_document()
        self.assertEqual(remove, {"command": "removeimagefromcollection", "imageidentifier": "frame"})

    def test_processframes(self) -> None:
        movie = makeid_withobjecttypeandname("movieimporter", "movie")
        command = make_processframes(movie, [{"frametime": {"time": 1.0}, "commands": []}], create_localcontext=True)
        document = command.to_document()
        self.assertTrue(document["localcontext"])
        self.assertEqual(len(document["processinstructions"]), 1)


if __name__ == "__main__":
    unittest.main()
