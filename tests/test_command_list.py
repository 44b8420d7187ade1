from __future__ import annotations

import unittest

from movingimages_core.command_list import CommandList, CommandListSealedError
from movingimages_core.commands import make_close
from movingimages_core.documents import DocumentValidationError
from movingimages_core.geometry import make_rectangle, make_size
from movingimages_core.naming import SequentialNameFactory
from movingimages_core.smig import serialize_commands


class CommandListTests(unittest.TestCase):
    def test_lifecycle_states(self) -> None:
        commands = CommandList()
        self.assertEqual(commands.state, "empty")
        commands.add_command(make_close({"objectreference": 1}))
        self.assertEqual(commands.state, "building")
        commands.seal()
        self.assertEqual(commands.state, "sealed")

    def test_sealed_list_rejects_mutation(self) -> None:
        commands = CommandList()
        commands.seal()
        with self.assertRaises(CommandListSealedError):
            commands.add_command(make_close({"objectreference": 1}))
        with self.assertRaises(CommandListSealedError):
            commands.clear()

    def test_options_only_document(self) -> None:
        commands = (
            CommandList()
            .set_stoponfailure(False)
            .set_informationreturned("lastcommandresult")
            .set_saveresultstype("jsonfile")
            .set_saveresultsto("/x.json")
        )
        self.assertEqual(
            commands.to_document(),
            {
                "stoponfailure": False,
                "returns": "lastcommandresult",
                "saveresultstype": "jsonfile",
                "saveresultsto": "/x.json",
            },
        )

    def test_file_results_need_a_destination(self) -> None:
        commands = CommandList().set_saveresultstype("propertyfile")
        with self.assertRaises(DocumentValidationError):
            commands.to_document()

    def test_unknown_results_option_is_rejected(self) -> None:
        with self.assertRaises(DocumentValidationError):
            CommandList().set_informationreturned("everything")

    def test_each_create_adds_matching_close(self) -> None:
        commands = CommandList(name_factory=SequentialNameFactory("test"))
        bitmap = commands.make_createbitmapcontext(size=make_size(10, 10))
        window = commands.make_createwindowcontext(rect=make_rectangle())
        importer = commands.make_createimporter("/tmp/in.png")
        exporter = commands.make_createexporter("/tmp/out.png", export_type="public.png")
        created = [bitmap, window, importer, exporter]
        self.assertEqual([c["objectname"] for c in created], ["test.0", "test.1", "test.2", "test.3"])
        self.assertEqual(len(commands.commands), 4)
        self.assertEqual([c["receiverobject"] for c in commands.cleanupcommands], created)
        self.assertTrue(all(c["command"] == "close" for c in commands.cleanupcommands))

    def test_create_without_cleanup(self) -> None:
        commands = CommandList()
        commands.make_createimporter("/tmp/in.png", addtocleanup=False, name="in")
        self.assertEqual(commands.cleanupcommands, [])
        self.assertEqual(commands.commands[0]["objectname"], "in")

    def test_create_requires_dimensions(self) -> None:
        with self.assertRaises(DocumentValidationError):
            CommandList().make_createbitmapcontext()
        with self.assertRaises(DocumentValidationError):
            CommandList().make_createpdfcontext(size=make_size())

    def test_clear_commandlist_keeps_options(self) -> None:
        commands = CommandList().set_stoponfailure(True).add_command(make_close({"objectreference": 3}))
        commands.clear_commandlist()
        self.assertEqual(commands.to_document(), {"stoponfailure": True})
        commands.clear()
        self.assertEqual(commands.state, "empty")

    def test_command_without_verb_is_rejected(self) -> None:
        with self.assertRaises(DocumentValidationError):
            CommandList().add_command({"receiverobject": {"objectreference": 1}})

    def test_serialized_commands_keep_insertion_order(self) -> None:
        commands = CommandList()
        commands.set_variables({"w": 10})
        commands.add_command({"command": "closeall"})
        self.assertEqual(serialize_commands(commands), '{"variables":{"w":10},"commands":[{"command":"closeall"}]}')


if __name__ == "__main__":
    unittest.main()
