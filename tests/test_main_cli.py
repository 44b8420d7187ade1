from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from PIL import Image

import main


class MainCliTests(unittest.TestCase):
    def test_transition_print_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            source = Path(tmpdir) / "a.png"
            target = Path(tmpdir) / "b.png"
            Image.new("RGB", (16, 8)).save(source)
            Image.new("RGB", (16, 8)).save(target)
            stdout = io.StringIO()
            with contextlib.redirect_stdout(stdout):
                code = main.main(
                    [
                        "transition",
                        "--source",
                        str(source),
                        "--target",
                        str(target),
                        "--outputdir",
                        str(Path(tmpdir) / "frames"),
                        "--count",
                        "2",
                        "--input",
                        "inputAngle=0.5",
                        "--print-json",
                    ]
                )
        self.assertEqual(code, 0)
        document = json.loads(stdout.getvalue())
        self.assertEqual(document["commands"][2]["size"], {"width": 16, "height": 8})

    def test_scale_images_print_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            image = Path(tmpdir) / "a.jpg"
            Image.new("RGB", (40, 20)).save(image)
            stdout = io.StringIO()
            with contextlib.redirect_stdout(stdout):
                code = main.main(
                    ["scale-images", str(image), "--outputdir", tmpdir, "--scalex", "0.5", "--print-json"]
                )
        self.assertEqual(code, 0)
        document = json.loads(stdout.getvalue())
        self.assertEqual(document["commands"][0]["size"], {"width": 20, "height": 10})
        self.assertEqual(document["commands"][1]["utifiletype"], "public.jpeg")

    def test_invalid_scale_factor_exits_with_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertLogs("movingimages", level="ERROR") as logs:
                code = main.main(
                    ["scale-images", "a.png", "--outputdir", tmpdir, "--scalex", "-1", "--print-json"]
                )
        self.assertEqual(code, 1)
        self.assertIn("scale factors must be > 0", logs.output[0])

    def test_malformed_filter_input_exits_with_error(self) -> None:
        with self.assertLogs("movingimages", level="ERROR"):
            code = main.main(
                [
                    "transition",
                    "--source",
                    "a.png",
                    "--target",
                    "b.png",
                    "--outputdir",
                    "/tmp",
                    "--input",
                    "inputAngle",
                    "--print-json",
                ]
            )
        self.assertEqual(code, 1)

    def test_filter_inputs_must_be_numeric(self) -> None:
        with self.assertRaises(ValueError):
            main._parse_filter_inputs(["inputAngle=wide"])
        self.assertEqual(main._parse_filter_inputs(["inputAngle=2"]), {"inputAngle": 2.0})

    def test_parser_requires_subcommand(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main.build_parser().parse_args([])


if __name__ == "__main__":
    unittest.main()
