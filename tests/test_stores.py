import tempfile
import unittest
from pathlib import Path

import yaml

from cms.models import DocumentKind
from cms.services import CredentialStore, DocumentNotFound, DocumentStore, HistoryStore
from cms.services.document_store import duplicate_name
from cms.utils.validators import ValidationError


class StoreTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory(prefix="cms-store-test-")
        self.root = Path(self._tmp.name)
        self.documents = DocumentStore(self.root / "data")

    def tearDown(self):
        self._tmp.cleanup()


class DocumentStoreTests(StoreTestCase):
    def test_list_is_sorted_by_name(self):
        for name in ("zeta.txt", "alpha.md", "photo.png"):
            self.documents.write(name, "x")
        names = [d.name for d in self.documents.list()]
        self.assertEqual(names, ["alpha.md", "photo.png", "zeta.txt"])

    def test_list_reports_size_and_kind(self):
        self.documents.write("about.md", "# Title")
        document = self.documents.list()[0]
        self.assertEqual(document.size_bytes, 7)
        self.assertEqual(document.kind, DocumentKind.MARKDOWN)

    def test_write_then_read_returns_same_content(self):
        self.documents.write("notes.txt", "line one\nline two\n")
        self.assertEqual(self.documents.read_text("notes.txt"), "line one\nline two\n")

        self.documents.write("notes.txt", b"\x00binary")
        self.assertEqual(self.documents.read("notes.txt"), b"\x00binary")

    def test_read_missing_document(self):
        with self.assertRaises(DocumentNotFound) as ctx:
            self.documents.read("missing.txt")
        self.assertEqual(str(ctx.exception), "missing.txt does not exist.")

    def test_names_outside_directory_are_not_found(self):
        for name in ("../escape.txt", "", "sub/dir.txt"):
            with self.assertRaises(DocumentNotFound, msg=name):
                self.documents.path_for(name)
        self.assertFalse(self.documents.exists("../escape.txt"))

    def test_rename_moves_content(self):
        self.documents.write("old.md", "body")
        self.documents.rename("old.md", "new.md")
        self.assertFalse(self.documents.exists("old.md"))
        self.assertEqual(self.documents.read_text("new.md"), "body")

    def test_rename_missing_source(self):
        with self.assertRaises(DocumentNotFound):
            self.documents.rename("missing.md", "new.md")

    def test_duplicate_inserts_copy_before_first_dot(self):
        self.documents.write("report.md", "content")
        self.assertEqual(self.documents.duplicate("report.md"), "report_copy.md")
        self.assertEqual(self.documents.read_text("report_copy.md"), "content")
        self.assertEqual(self.documents.read_text("report.md"), "content")

    def test_duplicate_never_overwrites_existing_copy(self):
        self.documents.write("report.md", "original")
        self.documents.write("report_copy.md", "older copy")
        self.assertEqual(self.documents.duplicate("report.md"), "report_copy_copy.md")
        self.assertEqual(self.documents.read_text("report_copy.md"), "older copy")

    def test_duplicate_missing_document(self):
        with self.assertRaises(DocumentNotFound):
            self.documents.duplicate("missing.md")

    def test_duplicate_name_derivation(self):
        self.assertEqual(duplicate_name("report.v2.md"), "report_copy.v2.md")
        self.assertEqual(duplicate_name("README"), "README_copy")

    def test_delete(self):
        self.documents.write("gone.txt", "")
        self.documents.delete("gone.txt")
        self.assertEqual(self.documents.list(), [])
        with self.assertRaises(DocumentNotFound):
            self.documents.delete("gone.txt")

    def test_classify(self):
        self.assertEqual(DocumentStore.classify("a.md"), DocumentKind.MARKDOWN)
        self.assertEqual(DocumentStore.classify("a.txt"), DocumentKind.TEXT)
        self.assertEqual(DocumentStore.classify("a.JPG"), DocumentKind.IMAGE)
        self.assertEqual(DocumentStore.classify("a.jpeg"), DocumentKind.IMAGE)
        self.assertEqual(DocumentStore.classify("a.png"), DocumentKind.IMAGE)
        self.assertEqual(DocumentStore.classify("a.pdf"), DocumentKind.UNSUPPORTED)
        self.assertEqual(DocumentStore.classify("noext"), DocumentKind.UNSUPPORTED)


class HistoryStoreTests(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.history_file = self.root / "history.yml"
        self.history = HistoryStore(self.history_file, self.documents)

    def save(self, name, content):
        self.history.record(name)
        self.documents.write(name, content)

    def test_first_record_opens_empty_history(self):
        self.documents.write("doc.md", "v0")
        self.history.record("doc.md")
        self.assertEqual(self.history.versions("doc.md"), [])

    def test_snapshots_are_taken_before_each_overwrite(self):
        self.save("doc.md", "A")
        self.save("doc.md", "B")
        self.save("doc.md", "C")
        self.assertEqual(self.history.versions("doc.md"), ["A", "B"])
        self.assertEqual(self.documents.read_text("doc.md"), "C")

    def test_snapshots_keep_line_break_characters(self):
        self.save("doc.md", "a\r\nb  \n")
        self.save("doc.md", "x\x85y z \u00e9")
        self.save("doc.md", "B")
        self.assertEqual(self.history.versions("doc.md"), ["a\r\nb  \n", "x\x85y z \u00e9"])

    def test_history_is_persisted_as_yaml(self):
        self.save("doc.md", "A")
        self.save("doc.md", "B")
        with open(self.history_file, encoding="utf-8") as f:
            self.assertEqual(yaml.safe_load(f), {"doc.md": ["A"]})

    def test_move_rekeys_and_replaces_target(self):
        self.save("old.md", "A")
        self.save("old.md", "B")
        self.save("new.md", "X")
        self.save("new.md", "Y")
        self.history.move("old.md", "new.md")
        self.assertEqual(self.history.versions("old.md"), [])
        self.assertEqual(self.history.versions("new.md"), ["A"])

    def test_move_without_history_is_a_no_op(self):
        self.history.move("unknown.md", "other.md")
        self.assertFalse(self.history_file.exists())

    def test_drop(self):
        self.save("doc.md", "A")
        self.save("doc.md", "B")
        self.history.drop("doc.md")
        self.assertEqual(self.history.versions("doc.md"), [])
        self.history.drop("doc.md")

    def test_versions_of_unknown_document(self):
        self.assertEqual(self.history.versions("unknown.md"), [])


class CredentialStoreTests(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.users_file = self.root / "users.yml"
        self.credentials = CredentialStore(self.users_file)

    def test_register_then_verify(self):
        self.credentials.register("admin", "secret")
        self.assertTrue(self.credentials.verify("admin", "secret"))
        self.assertFalse(self.credentials.verify("admin", "wrong"))
        self.assertFalse(self.credentials.verify("nobody", "secret"))

    def test_passwords_are_stored_hashed(self):
        self.credentials.register("admin", "secret")
        with open(self.users_file, encoding="utf-8") as f:
            stored = yaml.safe_load(f)
        self.assertEqual(list(stored), ["admin"])
        self.assertNotEqual(stored["admin"], "secret")

    def test_register_rejects_taken_username(self):
        self.credentials.register("admin", "secret")
        with self.assertRaisesRegex(ValidationError, "already taken"):
            self.credentials.register("admin", "other")
        self.assertTrue(self.credentials.verify("admin", "secret"))

    def test_register_rejects_empty_fields(self):
        with self.assertRaises(ValidationError):
            self.credentials.register("", "secret")
        with self.assertRaises(ValidationError):
            self.credentials.register("admin", "")
        self.assertFalse(self.users_file.exists())

    def test_keeps_existing_users(self):
        self.credentials.register("alice", "one")
        self.credentials.register("bob", "two")
        self.assertTrue(self.credentials.exists("alice"))
        self.assertTrue(self.credentials.verify("bob", "two"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
