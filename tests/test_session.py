import json
import random
import tempfile
import unittest
from pathlib import Path

from wordsearch.core.constants import GridScale
from wordsearch.engine.session import SessionSettings, WordSearchSession
from wordsearch.engine.session_store import SessionStore


ANIMALS = "lang=en letters=A-Z title=Animals\ncat\ndog\nbird\nhorse\nmouse\nsnake\ntiger\nzebra\n"
FRUIT = "lang=en letters=A-Z title=Fruit\napple\npear\nplum\ncherry\nmango\n"


class SessionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        lists = self.root / "word_lists"
        lists.mkdir()
        (lists / "animals.txt").write_text(ANIMALS, encoding="utf-8")
        (lists / "fruit.txt").write_text(FRUIT, encoding="utf-8")
        self.state_path = self.root / "state" / "session.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def open_session(self, **settings) -> WordSearchSession:
        store = SessionStore(self.state_path)
        if settings:
            session = WordSearchSession(
                store,
                SessionSettings(**settings),
                base_dir=self.root,
                rng=random.Random(5),
            )
            store.load()
            return session
        return WordSearchSession.open(store, base_dir=self.root, rng=random.Random(6))


class SessionSettingsTests(unittest.TestCase):
    def test_values_are_normalized(self) -> None:
        settings = SessionSettings(wordlist_path="", max_words=99, grid_size=11, grid_scale="huge")
        self.assertEqual(settings.wordlist_path, "word_lists/english_basic.txt")
        self.assertEqual(settings.max_words, 24)
        self.assertEqual(settings.grid_size, 12)
        self.assertEqual(settings.grid_scale, GridScale.NORMAL)

    def test_from_payload(self) -> None:
        settings = SessionSettings.from_payload(
            {"wordlist_path": "x.txt", "max_words": 6, "grid_size": 8, "grid_scale": "large"}
        )
        self.assertEqual(settings.wordlist_path, "x.txt")
        self.assertEqual(settings.max_words, 6)
        self.assertEqual(settings.grid_size, 8)
        self.assertEqual(settings.grid_scale, GridScale.LARGE)

    def test_non_string_word_list_path_uses_default(self) -> None:
        for value in (5, ["animals.txt"], {"path": "x"}):
            settings = SessionSettings.from_payload({"wordlist_path": value})
            self.assertEqual(settings.wordlist_path, "word_lists/english_basic.txt")


class SessionLifecycleTests(SessionTestCase):
    def test_board_is_built_from_word_list(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt", grid_size=10, max_words=6)
        board = session.get_board()
        self.assertEqual(board.size, 10)
        self.assertEqual(board.metadata.title, "Animals")
        self.assertGreater(len(board.placed_words), 0)
        self.assertLessEqual(len(board.placed_words), 6)
        self.assertIs(session.get_board(), board)

    def test_saved_board_is_restored(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt", grid_size=10, max_words=6)
        board = session.get_board()
        entry = board.placed_words[0]
        session.tap(entry.first.row, entry.first.col)
        session.tap(entry.last.row, entry.last.col)

        doc = json.loads(self.state_path.read_text(encoding="utf-8"))
        self.assertEqual(doc["version"], 1)
        self.assertEqual(doc["wordlist_path"], "word_lists/animals.txt")
        self.assertIn(entry.text, doc["board"]["found_words"])

        reopened = self.open_session()
        restored = reopened.get_board()
        self.assertEqual(restored.get_grid(), board.get_grid())
        self.assertEqual(restored.placed_words, board.placed_words)
        self.assertEqual(restored.found_words, {entry.text})

    def test_saved_board_for_other_grid_size_is_not_restored(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt", grid_size=10)
        session.get_board()
        session.save()

        other = WordSearchSession(
            SessionStore(self.state_path),
            SessionSettings(wordlist_path="word_lists/animals.txt", grid_size=14),
            base_dir=self.root,
        )
        other.store.load()
        self.assertEqual(other.get_board().size, 14)

    def test_new_puzzle_clears_progress(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt", grid_size=10)
        board = session.get_board()
        entry = board.placed_words[0]
        session.tap(entry.first.row, entry.first.col, is_hold=True)
        self.assertEqual(board.found_words, {entry.text})

        session.new_puzzle()
        self.assertEqual(session.get_board().found_words, set())
        self.assertIsNone(session.selection.anchor)

    def test_toggle_solution_is_persisted(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt")
        self.assertTrue(session.toggle_solution())
        doc = json.loads(self.state_path.read_text(encoding="utf-8"))
        self.assertTrue(doc["board"]["show_solution"])


class SessionSettingChangeTests(SessionTestCase):
    def test_changing_word_list_replaces_board(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt")
        before = session.get_board()
        session.set_word_list("word_lists/fruit.txt")
        after = session.get_board()
        self.assertIsNot(before, after)
        self.assertEqual(after.metadata.title, "Fruit")
        self.assertIs(session.selection.board, after)

    def test_stored_non_string_word_list_path_falls_back_to_default(self) -> None:
        self.state_path.parent.mkdir(parents=True)
        self.state_path.write_text(json.dumps({"version": 1, "wordlist_path": 5}), encoding="utf-8")

        session = WordSearchSession.open(SessionStore(self.state_path), base_dir=self.root)
        self.assertEqual(session.settings.wordlist_path, "word_lists/english_basic.txt")
        with self.assertLogs("wordsearch.data.wordlist", level="WARNING"):
            board = session.get_board()
        self.assertEqual(board.size, 12)
        self.assertEqual(board.placed_words, [])
        self.assertEqual(board.metadata.title, "Default list")

    def test_non_string_word_list_is_ignored(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt", grid_size=8)
        board = session.get_board()
        session.set_word_list(7)
        self.assertEqual(session.settings.wordlist_path, "word_lists/animals.txt")
        self.assertIs(session.get_board(), board)

    def test_empty_word_list_is_ignored(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt")
        board = session.get_board()
        session.set_word_list("")
        self.assertIs(session.get_board(), board)

    def test_changing_grid_size_replaces_board(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt", grid_size=10)
        board = session.get_board()
        session.set_grid_size(10)
        self.assertIs(session.get_board(), board)
        session.set_grid_size(16)
        self.assertEqual(session.get_board().size, 16)
        session.set_grid_size(13)
        self.assertEqual(session.settings.grid_size, 12)

    def test_max_words_is_clamped_and_applies_to_next_puzzle(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt", max_words=8)
        board = session.get_board()
        session.set_max_words(1)
        self.assertEqual(session.settings.max_words, 4)
        self.assertEqual(board.max_words, 4)
        session.new_puzzle()
        self.assertLessEqual(len(board.placed_words), 4)
        session.set_max_words(100)
        self.assertEqual(session.settings.max_words, 24)

    def test_grid_scale_accepts_known_keys_only(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt")
        session.get_board()
        session.set_grid_scale("large")
        self.assertEqual(session.settings.grid_scale, GridScale.LARGE)
        session.set_grid_scale("enormous")
        self.assertEqual(session.settings.grid_scale, GridScale.LARGE)
        doc = json.loads(self.state_path.read_text(encoding="utf-8"))
        self.assertEqual(doc["grid_scale"], "large")

    def test_word_lists_are_discovered(self) -> None:
        session = self.open_session(wordlist_path="word_lists/animals.txt")
        titles = [entry.title for entry in session.list_word_lists()]
        self.assertEqual(titles, ["Animals", "Fruit"])


class SessionStoreTests(unittest.TestCase):
    def test_corrupt_file_loads_as_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "state.json"
            path.write_text("{not json", encoding="utf-8")
            store = SessionStore(path)
            with self.assertLogs("wordsearch.engine.session_store", level="ERROR"):
                self.assertIsNone(store.load())

    def test_missing_file_loads_as_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertIsNone(SessionStore(Path(tmpdir) / "absent.json").load())

    def test_save_then_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            store = SessionStore(Path(tmpdir) / "nested" / "state.json")
            self.assertTrue(store.save({"grid_size": 8}))
            self.assertEqual(store.cached, {"version": 1, "grid_size": 8})
            self.assertEqual(SessionStore(store.path).load(), {"version": 1, "grid_size": 8})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
