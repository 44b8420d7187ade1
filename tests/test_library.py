from __future__ import annotations

import subprocess
import tempfile
import unittest
from pathlib import Path
from typing import Any

from PIL import Image

from movingimages_core.config import SmigConfig
from movingimages_core.geometry import make_rectangle
from movingimages_core.naming import SequentialNameFactory
from movingimages_core.smig import SmigClient
from movingimages_library.helpers import (
    build_drawimage_commands,
    close_object_nothrow,
    create_bitmapcontext,
    save_image,
)
from movingimages_library.metadata import ImageMetadataError, get_imagedimensions, get_imagefiletype
from movingimages_library.scaling import ScaleOptions, build_lanczos_scale_commands, build_quartz_scale_commands
from movingimages_library.transition import TransitionOptions, build_transition_commands


class _FakeRunner:
    def __init__(self, returncode: int = 0, stdout: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.calls: list[list[str]] = []

    def __call__(self, argv: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(argv))
        return subprocess.CompletedProcess(argv, self.returncode, self.stdout, "")


def _verbs(document: dict[str, Any]) -> list[str]:
    return [c["command"] for c in document["commands"]]


class MetadataTests(unittest.TestCase):
    def test_dimensions_and_type_of_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "sample.png"
            Image.new("RGB", (64, 32), color=(255, 0, 0)).save(path)
            self.assertEqual(get_imagedimensions(path), {"width": 64, "height": 32})
            self.assertEqual(get_imagefiletype(path), "public.png")

    def test_missing_and_unreadable_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ImageMetadataError):
                get_imagedimensions(Path(tmpdir) / "missing.png")
            text_file = Path(tmpdir) / "notes.png"
            text_file.write_text("not an image", encoding="utf-8")
            with self.assertRaises(ImageMetadataError):
                get_imagefiletype(text_file)


class ScalingTests(unittest.TestCase):
    def test_lanczos_filter_reads_intermediate_bitmap(self) -> None:
        options = ScaleOptions(outputdir="/tmp/scaled", scalex=0.5, scaley=0.5, quality=0.7)
        commands = build_lanczos_scale_commands(
            options,
            ["/images/a.jpg", "/images/b.jpg"],
            dimensions={"width": 200, "height": 100},
            filetype="public.jpeg",
            name_factory=SequentialNameFactory("scale"),
        )
        document = commands.to_document()
        create_filterchain = document["commands"][3]
        lanczos = create_filterchain["imagefilterchaindict"]["cifilterlist"][0]
        self.assertEqual(lanczos["cifiltername"], "CILanczosScaleTransform")
        self.assertEqual(
            lanczos["cifilterproperties"][0]["cifiltervalue"],
            {"objecttype": "bitmapcontext", "objectname": "scale.2"},
        )
        self.assertEqual(document["commands"][0]["size"], {"width": 100, "height": 50})
        self.assertEqual(
            _verbs(document)[4:14],
            [
                "create",
                "drawelement",
                "renderfilterchain",
                "setproperty",
                "addimage",
                "setproperty",
                "export",
                "close",
                "create",
                "drawelement",
            ],
        )
        self.assertEqual(document["commands"][7]["propertyvalue"], "/tmp/scaled/a.jpg")
        self.assertEqual(document["commands"][9]["propertykey"], "exportcompressionquality")
        self.assertFalse(document["runasynchronously"])

    def test_quartz_scale_uses_context_transform(self) -> None:
        options = ScaleOptions(outputdir="/tmp/scaled", scalex=2.0, scaley=2.0, interpqual="high", copymetadata=True)
        commands = build_quartz_scale_commands(
            options, ["/images/a.png"], dimensions={"width": 10, "height": 10}, filetype="public.png"
        )
        document = commands.to_document()
        draw = document["commands"][3]["drawinstructions"]
        self.assertEqual(draw["interpolationquality"], "kCGInterpolationHigh")
        self.assertEqual(draw["contexttransformation"][0]["scale"], {"x": 2.0, "y": 2.0})
        self.assertIn("secondaryimageindex", document["commands"][6])

    def test_scale_options_validation(self) -> None:
        with self.assertRaises(ValueError):
            ScaleOptions(outputdir="")
        with self.assertRaises(ValueError):
            ScaleOptions(outputdir="/tmp", interpqual="fancy")
        with self.assertRaises(ValueError):
            build_quartz_scale_commands(ScaleOptions(outputdir="/tmp"), [])


class TransitionTests(unittest.TestCase):
    def test_frames_sweep_input_time(self) -> None:
        options = TransitionOptions(
            sourceimage="/images/a.png",
            targetimage="/images/b.png",
            outputdir="/tmp/frames",
            count=3,
            filter_inputs={"inputAngle": 1.5},
        )
        commands = build_transition_commands(
            options, dimensions={"width": 32, "height": 32}, name_factory=SequentialNameFactory("t")
        )
        document = commands.to_document()
        renders = [c for c in document["commands"] if c["command"] == "renderfilterchain"]
        times = [r["renderinstructions"]["cifilterproperties"][0]["cifiltervalue"] for r in renders]
        self.assertEqual(times, [0.0, 0.5, 1.0])
        paths = [c["propertyvalue"] for c in document["commands"] if c["command"] == "setproperty"]
        self.assertEqual(paths, ["/tmp/frames/image000.tiff", "/tmp/frames/image001.tiff", "/tmp/frames/image002.tiff"])
        transition = document["commands"][3]["imagefilterchaindict"]["cifilterlist"][0]
        self.assertEqual(
            [p["cifilterkey"] for p in transition["cifilterproperties"]],
            ["inputImage", "inputTargetImage", "inputAngle", "inputTime"],
        )
        self.assertEqual(len(document["cleanupcommands"]), 5)

    def test_options_validation(self) -> None:
        with self.assertRaises(ValueError):
            TransitionOptions("a", "b", "/tmp", exportfiletype="public.heic")
        with self.assertRaises(ValueError):
            TransitionOptions("a", "b", "/tmp", count=0)


class HelperTests(unittest.TestCase):
    def test_create_bitmapcontext_returns_reference(self) -> None:
        runner = _FakeRunner(stdout="12")
        client = SmigClient(SmigConfig(), runner=runner)
        self.assertEqual(create_bitmapcontext(client, 100, 50), {"objectreference": 12})

    def test_save_image_exports_and_closes(self) -> None:
        runner = _FakeRunner()
        client = SmigClient(SmigConfig(), runner=runner)
        save_image(client, {"objectreference": 4}, "/tmp/out.png", filetype="public.png")
        self.assertEqual(runner.calls[0][1:3], ["performcommand", "-jsonstring"])
        self.assertIn('"utifiletype":"public.png"', runner.calls[0][3])
        self.assertIn('"cleanupcommands":[{"command":"close"', runner.calls[0][3])

    def test_close_object_nothrow_ignores_failure(self) -> None:
        client = SmigClient(SmigConfig(), runner=_FakeRunner(returncode=2))
        with self.assertLogs("movingimages_core.smig", level="WARNING"):
            close_object_nothrow(client, {"objectreference": 99})

    def test_drawimage_commands(self) -> None:
        commands = build_drawimage_commands({"objectreference": 1}, make_rectangle(), "/images/a.png", imageindex=0)
        document = commands.to_document()
        self.assertEqual(_verbs(document), ["create", "drawelement"])
        self.assertEqual(document["commands"][1]["drawinstructions"]["imageindex"], 0)


if __name__ == "__main__":
    unittest.main()
