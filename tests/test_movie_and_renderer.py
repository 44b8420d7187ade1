from __future__ import annotations

import unittest

from movingimages_core.command_list import CommandList
from movingimages_core.commands import make_assignimage_tocollection, make_processframes
from movingimages_core.documents import DocumentValidationError
from movingimages_core.geometry import make_rectangle
from movingimages_core.objectid import makeid_withobjecttypeandname
from movingimages_draw.elements import DrawElement
from movingimages_draw.movie import (
    ProcessMovieFrameInstructions,
    make_movietime,
    make_movietime_fromseconds,
    make_movietime_nextsample,
    make_movietrackid_from_characteristic,
    make_movietrackid_from_mediatype,
    make_movietrackid_from_persistenttrackid,
)
from movingimages_draw.renderer import RendererDocument


class MovieTimeTests(unittest.TestCase):
    def test_time_shapes(self) -> None:
        self.assertEqual(make_movietime_fromseconds(2), {"time": 2.0})
        self.assertEqual(make_movietime(1200, 600), {"value": 1200, "timescale": 600, "flags": 1, "epoch": 0})
        self.assertEqual(make_movietime_nextsample(), "movienextsample")

    def test_time_needs_value_and_positive_scale(self) -> None:
        with self.assertRaises(DocumentValidationError):
            make_movietime(timescale=600)
        with self.assertRaises(DocumentValidationError):
            make_movietime(10, 0)

    def test_track_identifiers(self) -> None:
        self.assertEqual(make_movietrackid_from_mediatype(0, "vide"), {"trackindex": 0, "mediatype": "vide"})
        self.assertEqual(
            make_movietrackid_from_characteristic(1, "AVMediaCharacteristicVisual"),
            {"trackindex": 1, "mediacharacteristic": "AVMediaCharacteristicVisual"},
        )
        self.assertEqual(make_movietrackid_from_persistenttrackid(3), {"trackid": 3})
        with self.assertRaises(DocumentValidationError):
            make_movietrackid_from_mediatype(0, "film")


class ProcessFramesTests(unittest.TestCase):
    def test_frame_instructions_in_processframes_command(self) -> None:
        movie = makeid_withobjecttypeandname("movieimporter", "movie")
        bitmap = makeid_withobjecttypeandname("bitmapcontext", "canvas")
        frame = ProcessMovieFrameInstructions().set_frametime(make_movietime_fromseconds(1.5))
        frame.set_imageidentifier("frame")
        frame.add_command(make_assignimage_tocollection(bitmap, "frame"))
        command = make_processframes(movie, [frame], imageidentifier="frame")
        document = command.to_document()
        self.assertEqual(document["processinstructions"][0]["frametime"], {"time": 1.5})
        self.assertEqual(document["imageidentifier"], "frame")

    def test_frame_instructions_need_commands(self) -> None:
        frame = ProcessMovieFrameInstructions().set_frametime(make_movietime_nextsample())
        with self.assertRaises(DocumentValidationError):
            frame.to_document()

    def test_frametime_string_must_be_next_sample(self) -> None:
        with self.assertRaises(DocumentValidationError):
            ProcessMovieFrameInstructions().set_frametime("later")


class RendererDocumentTests(unittest.TestCase):
    def test_sections_use_their_keys(self) -> None:
        setup = CommandList()
        setup.make_createimporter("/tmp/in.png", name="in")
        draw = DrawElement().set_rectangle(make_rectangle())
        document = RendererDocument().set_setupcommands(setup).set_drawinstructions(draw).to_document()
        self.assertEqual(list(document), ["setupcommandsdictionary", "drawdictionary"])
        self.assertEqual(document["setupcommandsdictionary"]["commands"][0]["objectname"], "in")
        self.assertEqual(document["drawdictionary"]["elementtype"], "fillrectangle")


if __name__ == "__main__":
    unittest.main()
