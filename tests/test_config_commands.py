import tempfile
import unittest
from pathlib import Path

from aide.app import AideApp
from aide.commands import configs
from aide.config import Settings, StorageSettings
from aide.core.resolution import ExactMatch
from aide.prompt_io import BufferPromptIO


class TestConfigCommands(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        root = Path(tmp.name)
        self.prompt_io = BufferPromptIO()
        settings = Settings(storage=StorageSettings(database_path=root / "aide.db", data_dir=root / "data"))
        self.app = AideApp.create(settings, prompt_io=self.prompt_io)
        self.addCleanup(self.app.close)
        configs.set_value(self.app, "editor", "vim")

    def output(self) -> str:
        return "\n".join(self.prompt_io.outputs)

    def test_new_key_is_stored_and_indexed(self) -> None:
        self.assertEqual(self.app.store.get_config("editor"), "vim")
        self.assertEqual(self.app.configs.resolve("editor"), ExactMatch("editor"))
        self.assertIn("Config 'editor' set to 'vim'", self.output())

    def test_exact_key_is_updated(self) -> None:
        self.assertEqual(configs.set_value(self.app, "editor", "nano"), "editor")
        self.assertEqual(self.app.store.get_config("editor"), "nano")
        self.assertEqual(self.prompt_io.prompts, [])

    def test_confirmed_suggestion_updates_existing_key(self) -> None:
        self.prompt_io.inputs.append("y")
        self.assertEqual(configs.set_value(self.app, "editr", "nano"), "editor")
        self.assertEqual(self.app.store.config_keys(), ["editor"])
        self.assertEqual(self.app.store.get_config("editor"), "nano")

    def test_declined_suggestion_creates_new_key(self) -> None:
        self.prompt_io.inputs.append("n")
        self.assertEqual(configs.set_value(self.app, "editr", "nano"), "editr")
        self.assertEqual(self.app.store.config_keys(), ["editor", "editr"])
        self.assertEqual(self.app.store.get_config("editor"), "vim")
        self.assertEqual(self.app.configs.resolve("editr"), ExactMatch("editr"))

    def test_get(self) -> None:
        self.assertEqual(configs.get_value(self.app, "editor"), "vim")
        self.assertIn("editor = vim", self.output())

    def test_get_unknown_key(self) -> None:
        self.assertIsNone(configs.get_value(self.app, "zzz"))
        self.assertIn("Config key 'zzz' not found.", self.output())

    def test_get_declined(self) -> None:
        self.prompt_io.inputs.append("n")
        self.assertIsNone(configs.get_value(self.app, "editr"))
        self.assertIn("Operation cancelled.", self.output())

    def test_delete(self) -> None:
        self.assertEqual(configs.delete(self.app, "editor"), "editor")
        self.assertIsNone(self.app.store.get_config("editor"))
        self.assertEqual(len(self.app.configs.index), 0)

    def test_list(self) -> None:
        configs.set_value(self.app, "theme", "dark")
        self.prompt_io.outputs.clear()
        configs.list_values(self.app)
        self.assertEqual(self.prompt_io.outputs[2:], ["editor = vim", "theme = dark"])

    def test_list_empty(self) -> None:
        configs.delete(self.app, "editor")
        self.prompt_io.outputs.clear()
        configs.list_values(self.app)
        self.assertEqual(self.prompt_io.outputs, ["No configuration values set."])


if __name__ == "__main__":
    unittest.main()
