import sqlite3
import tempfile
import unittest
from pathlib import Path

from aide.store import DEFAULT_AIDE, AideStore


class TestAideStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.store = AideStore(Path(self._tmp.name) / "nested" / "aide.db")
        self.addCleanup(self.store.close)

    def test_default_aide_exists(self) -> None:
        self.assertEqual(self.store.aide_names(), [DEFAULT_AIDE])
        record = self.store.get_aide(DEFAULT_AIDE)
        self.assertIsNotNone(record)
        self.assertEqual(record.aide_type, "file")

    def test_task_lifecycle(self) -> None:
        log = Path(self._tmp.name) / "tasks" / "a.txt"
        self.assertTrue(self.store.create_task("a", 3, "created", log))
        self.assertFalse(self.store.create_task("a", 3, "created", log))
        self.assertTrue(self.store.set_task_status("a", "completed"))
        self.assertTrue(self.store.set_task_priority("a", 1))
        record = self.store.get_task("a")
        self.assertEqual((record.status, record.priority, record.log_path), ("completed", 1, log))
        self.assertFalse(self.store.set_task_status("missing", "completed"))
        self.assertTrue(self.store.delete_task("a"))
        self.assertIsNone(self.store.get_task("a"))

    def test_task_names_keep_insertion_order(self) -> None:
        for name in ("b", "a", "c"):
            self.store.create_task(name, 3, "created", Path(f"/tmp/{name}.txt"))
        self.assertEqual(self.store.task_names(), ["b", "a", "c"])

    def test_tasks_list_by_priority(self) -> None:
        self.store.create_task("low", 5, "created", Path("/tmp/low.txt"))
        self.store.create_task("high", 1, "created", Path("/tmp/high.txt"))
        self.assertEqual([task.name for task in self.store.list_tasks()], ["high", "low"])

    def test_deleting_aide_removes_its_data(self) -> None:
        self.assertTrue(self.store.create_aide("notes", "text"))
        record = self.store.get_aide("notes")
        self.store.add_data(record.id, "hello", "[ts] hello")
        self.assertEqual(self.store.get_aide("notes").data_count, 1)
        self.assertTrue(self.store.delete_aide("notes"))
        self.assertEqual(self.store.list_data(), [])

    def test_config_upsert_keeps_key_order(self) -> None:
        self.store.set_config("editor", "vim")
        self.store.set_config("theme", "dark")
        self.store.set_config("editor", "nano")
        self.assertEqual(self.store.get_config("editor"), "nano")
        self.assertEqual(self.store.config_keys(), ["editor", "theme"])
        self.assertTrue(self.store.delete_config("theme"))
        self.assertFalse(self.store.delete_config("theme"))
        self.assertIsNone(self.store.get_config("theme"))

    def test_clear_all_recreates_default_aide(self) -> None:
        self.store.create_aide("notes", "text")
        self.store.create_task("a", 3, "created", Path("/tmp/a.txt"))
        self.store.set_config("k", "v")
        self.store.clear_all()
        self.assertEqual(self.store.task_names(), [])
        self.assertEqual(self.store.config_keys(), [])
        self.assertEqual(self.store.aide_names(), [DEFAULT_AIDE])

    def test_unexpected_errors_propagate(self) -> None:
        self.store.close()
        with self.assertRaises(sqlite3.ProgrammingError):
            self.store.task_names()


class TestLegacyDatabase(unittest.TestCase):
    """Databases whose data table was created without ON DELETE CASCADE."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "aide.db"
        conn = sqlite3.connect(self.path)
        conn.execute("CREATE TABLE aides (id INTEGER PRIMARY KEY, name TEXT UNIQUE NOT NULL, aide_type TEXT NOT NULL)")
        conn.execute(
            """
            CREATE TABLE data (
                id INTEGER PRIMARY KEY,
                aide_id INTEGER NOT NULL,
                input_text TEXT NOT NULL,
                command_output TEXT NOT NULL,
                FOREIGN KEY (aide_id) REFERENCES aides (id)
            )
            """
        )
        conn.commit()
        conn.close()
        self.store = AideStore(self.path)
        self.addCleanup(self.store.close)

    def test_delete_aide_removes_its_data(self) -> None:
        self.assertTrue(self.store.create_aide("notes", "text"))
        self.assertTrue(self.store.create_aide("keep", "text"))
        self.store.add_data(self.store.get_aide("notes").id, "a", "[t] a")
        self.store.add_data(self.store.get_aide("keep").id, "b", "[t] b")

        self.assertTrue(self.store.delete_aide("notes"))

        conn = sqlite3.connect(self.path)
        self.addCleanup(conn.close)
        rows = conn.execute("SELECT input_text FROM data").fetchall()
        self.assertEqual(rows, [("b",)])
        self.assertEqual([entry.input_text for entry in self.store.list_data()], ["b"])


if __name__ == "__main__":
    unittest.main()
