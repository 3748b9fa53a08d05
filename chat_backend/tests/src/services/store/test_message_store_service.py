"""Unit tests for the MessageStoreService façade."""

import base64
import unittest
from unittest.mock import MagicMock, patch

from chat_backend.src.api.middleware.exceptions import (
    ClearError,
    FetchError,
    ValidationError,
    WriteError,
)
from chat_backend.src.data_classes import MessageType
from chat_backend.src.services.store import (
    InMemoryMessageRepository,
    MessageStoreService,
    StoreError,
)


class TestMessageStoreService(unittest.TestCase):
    """Test cases for the façade backed by the in-memory repository."""

    def setUp(self) -> None:
        self.repository = InMemoryMessageRepository()
        self.service = MessageStoreService(self.repository)

    def test_empty_chat(self) -> None:
        self.assertEqual(self.service.list_messages(), [])

    def test_text_message_round_trip(self) -> None:
        self.service.append_text("alice", "hello")

        messages = self.service.list_messages()
        self.assertEqual(len(messages), 1)
        self.assertEqual(messages[0].type, MessageType.TEXT)
        self.assertEqual(messages[0].sender, "alice")
        self.assertEqual(messages[0].content, "hello")
        self.assertIsNotNone(messages[0].time)
        self.assertTrue(messages[0].id)

    def test_blank_sender_defaults_to_anonymous(self) -> None:
        stored = self.service.append_text("", "hi")
        self.assertEqual(stored.sender, "anonymous")

    def test_list_preserves_insertion_order(self) -> None:
        contents = [f"message {i}" for i in range(20)]
        for content in contents:
            self.service.append_text("alice", content)
        self.service.append_binary(MessageType.FILE, "bob", b"tail")

        messages = self.service.list_messages()
        self.assertEqual([m.content for m in messages[:-1]], contents)
        self.assertEqual(messages[-1].type, MessageType.FILE)

        times = [m.time for m in messages]
        self.assertEqual(times, sorted(times))

    def test_image_round_trip(self) -> None:
        data = bytes(range(256)) * 4

        self.service.append_binary(
            MessageType.IMAGE, "bob", data, mime_type="image/png", file_name="pic.png"
        )

        message = self.service.list_messages()[0]
        expected = "data:image/png;base64," + base64.b64encode(data).decode("ascii")
        self.assertEqual(message.type, MessageType.IMAGE)
        self.assertEqual(message.content, expected)
        self.assertEqual(message.file_size, len(data))
        self.assertEqual(message.file_name, "pic.png")
        self.assertEqual(message.mime_type, "image/png")

    def test_clear_then_list_is_empty(self) -> None:
        self.service.append_text("alice", "one")
        self.service.append_binary(MessageType.IMAGE, "bob", b"two", mime_type="image/gif")

        deleted = self.service.clear()

        self.assertEqual(deleted, 2)
        self.assertEqual(self.service.list_messages(), [])

    def test_clear_empty_chat(self) -> None:
        self.assertEqual(self.service.clear(), 0)

    def test_failed_clear_leaves_messages_intact(self) -> None:
        self.service.append_text("alice", "one")
        self.service.append_text("bob", "two")
        before = self.service.list_messages()

        # Fails after the documents were counted, before the list is replaced
        with patch.object(
            self.repository, "_commit", side_effect=StoreError("commit aborted")
        ):
            with self.assertRaises(ClearError) as ctx:
                self.service.clear()

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(self.service.list_messages(), before)


class TestMessageStoreServiceFailures(unittest.TestCase):
    """Test cases for validation and store failures using a mocked repository."""

    def setUp(self) -> None:
        self.repository = MagicMock()
        self.service = MessageStoreService(self.repository)

    def test_missing_payload_is_rejected_without_write(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self.service.append_binary(MessageType.IMAGE, "alice", None, mime_type="image/png")

        self.assertEqual(ctx.exception.status_code, 400)
        self.repository.insert.assert_not_called()

    def test_text_kind_is_not_binary(self) -> None:
        with self.assertRaises(ValidationError):
            self.service.append_binary(MessageType.TEXT, "alice", b"data")
        self.repository.insert.assert_not_called()

    def test_fetch_failure(self) -> None:
        self.repository.find_all.side_effect = StoreError("unreachable")

        with self.assertRaises(FetchError) as ctx:
            self.service.list_messages()

        self.assertEqual(ctx.exception.message, "Error fetching messages")
        self.assertEqual(ctx.exception.details, "unreachable")
        self.assertEqual(self.repository.find_all.call_count, 1)

    def test_text_write_failure(self) -> None:
        self.repository.insert.side_effect = StoreError("write rejected")

        with self.assertRaises(WriteError):
            self.service.append_text("alice", "hello")

    def test_binary_write_failure(self) -> None:
        self.repository.insert.side_effect = StoreError("document too large")

        with self.assertRaises(WriteError):
            self.service.append_binary(MessageType.FILE, "alice", b"data")

    def test_malformed_document_is_fetch_error(self) -> None:
        self.repository.find_all.return_value = [
            {"_id": "x1", "type": "video", "from": "mallory", "content": "clip"}
        ]

        with self.assertRaises(FetchError) as ctx:
            self.service.list_messages()

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertNotIn("video", str(ctx.exception.details))

    def test_document_without_id_is_fetch_error(self) -> None:
        self.repository.find_all.return_value = [{"type": "text", "content": "hi"}]

        with self.assertRaises(FetchError):
            self.service.list_messages()

    def test_malformed_insert_result_is_write_error(self) -> None:
        self.repository.insert.return_value = {"_id": "x1", "type": "video"}

        with self.assertRaises(WriteError) as ctx:
            self.service.append_text("alice", "hello")

        self.assertEqual(ctx.exception.status_code, 500)

    def test_insert_receives_normalized_document(self) -> None:
        self.repository.insert.side_effect = lambda doc: {**doc, "_id": "abc123"}

        stored = self.service.append_binary(
            MessageType.FILE, None, b"hello", mime_type="text/plain", file_name="a.txt"
        )

        document = self.repository.insert.call_args.args[0]
        self.assertEqual(
            document,
            {
                "type": "file",
                "from": "anonymous",
                "content": "data:text/plain;base64,aGVsbG8=",
                "fileName": "a.txt",
                "fileSize": 5,
                "mimeType": "text/plain",
            },
        )
        self.assertEqual(stored.id, "abc123")


if __name__ == "__main__":
    unittest.main()
