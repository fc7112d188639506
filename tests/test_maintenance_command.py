import tempfile
import unittest
from pathlib import Path

from aide.app import AideApp
from aide.commands import aides, configs, maintenance, tasks
from aide.config import Settings, StorageSettings
from aide.prompt_io import BufferPromptIO


class TestClear(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        root = Path(tmp.name)
        self.prompt_io = BufferPromptIO()
        settings = Settings(storage=StorageSettings(database_path=root / "aide.db", data_dir=root / "data"))
        self.app = AideApp.create(settings, prompt_io=self.prompt_io)
        self.addCleanup(self.app.close)
        tasks.create(self.app, "deploy staging", edit=False)
        aides.create(self.app, "recipes")
        configs.set_value(self.app, "editor", "vim")

    def test_clear_requires_confirmation(self) -> None:
        self.prompt_io.inputs.append("")
        self.assertFalse(maintenance.clear(self.app))
        self.assertEqual(self.app.store.task_names(), ["deploy staging"])

    def test_clear_resets_store_and_indexes(self) -> None:
        self.prompt_io.inputs.append("y")
        self.assertTrue(maintenance.clear(self.app))
        self.assertEqual(self.app.store.task_names(), [])
        self.assertEqual(self.app.tasks.names(), [])
        self.assertEqual(self.app.aides.names(), ["task_log"])
        self.assertEqual(self.app.configs.names(), [])
        self.assertIn("All data cleared successfully!", self.prompt_io.outputs)

    def test_assume_yes_skips_prompt(self) -> None:
        self.assertTrue(maintenance.clear(self.app, assume_yes=True))
        self.assertEqual(self.prompt_io.prompts, [])


if __name__ == "__main__":
    unittest.main()
