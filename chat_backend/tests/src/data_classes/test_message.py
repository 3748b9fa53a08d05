"""Unit tests for the message data classes."""

import base64
import unittest
from datetime import datetime, timezone

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from chat_backend.conf.config import Config
from chat_backend.src.data_classes import (
    Message,
    MessageDraft,
    MessageType,
    encode_data_uri,
    normalize_sender,
)


class TestNormalization(unittest.TestCase):
    """Test cases for sender defaulting and data URI encoding."""

    def test_blank_senders_default_to_anonymous(self) -> None:
        for raw in (None, "", "   "):
            self.assertEqual(normalize_sender(raw), Config.DEFAULT_SENDER)
        self.assertEqual(Config.DEFAULT_SENDER, "anonymous")

    def test_sender_is_kept_verbatim(self) -> None:
        self.assertEqual(normalize_sender("alice"), "alice")
        self.assertEqual(normalize_sender(" bob "), " bob ")

    def test_encode_data_uri(self) -> None:
        data = b"\x89PNG\r\n\x1a\n"
        expected = "data:image/png;base64," + base64.b64encode(data).decode("ascii")
        self.assertEqual(encode_data_uri(data, "image/png"), expected)

    def test_encode_data_uri_defaults_mime_type(self) -> None:
        self.assertEqual(
            encode_data_uri(b"", None), "data:application/octet-stream;base64,"
        )


class TestMessageDraft(unittest.TestCase):
    """Test cases for building drafts and their stored document layout."""

    def test_text_draft_document(self) -> None:
        draft = MessageDraft.text("alice", "hello")
        self.assertEqual(
            draft.to_document(), {"type": "text", "from": "alice", "content": "hello"}
        )

    def test_text_draft_fills_missing_fields(self) -> None:
        draft = MessageDraft.text(None, None)
        self.assertEqual(draft.sender, "anonymous")
        self.assertEqual(draft.content, "")

    def test_binary_draft_document(self) -> None:
        data = bytes(range(16))
        draft = MessageDraft.binary(
            MessageType.FILE, "", data, mime_type="application/pdf", file_name="a.pdf"
        )
        document = draft.to_document()

        self.assertEqual(document["type"], "file")
        self.assertEqual(document["from"], "anonymous")
        self.assertEqual(document["content"], encode_data_uri(data, "application/pdf"))
        self.assertEqual(document["fileName"], "a.pdf")
        self.assertEqual(document["fileSize"], 16)
        self.assertEqual(document["mimeType"], "application/pdf")
        self.assertNotIn("time", document)

    def test_binary_draft_explicit_size(self) -> None:
        draft = MessageDraft.binary(MessageType.IMAGE, "bob", b"abc", size=99)
        self.assertEqual(draft.file_size, 99)
        self.assertEqual(draft.mime_type, Config.DEFAULT_MIME_TYPE)

    def test_unknown_type_is_rejected(self) -> None:
        with self.assertRaises(PydanticValidationError):
            MessageDraft(type="video", content="x")


class TestMessage(unittest.TestCase):
    """Test cases for converting stored documents."""

    def test_from_document_and_json(self) -> None:
        object_id = ObjectId()
        stored_at = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        message = Message.from_document(
            {
                "_id": object_id,
                "type": "image",
                "from": "bob",
                "content": "data:image/png;base64,AAAA",
                "fileName": "pic.png",
                "fileSize": 3,
                "mimeType": "image/png",
                "time": stored_at,
            }
        )

        self.assertEqual(message.id, str(object_id))
        self.assertEqual(message.type, MessageType.IMAGE)
        self.assertEqual(message.time, stored_at)

        payload = message.to_json()
        self.assertEqual(payload["id"], str(object_id))
        self.assertEqual(payload["from"], "bob")
        self.assertEqual(payload["type"], "image")
        self.assertEqual(payload["fileSize"], 3)
        self.assertTrue(payload["time"].startswith("2024-05-01T12:30:00"))

    def test_text_json_omits_file_fields(self) -> None:
        message = Message.from_document(
            {"_id": ObjectId(), "type": "text", "from": "alice", "content": "hi"}
        )
        payload = message.to_json()
        for key in ("fileName", "fileSize", "mimeType", "time"):
            self.assertNotIn(key, payload)


if __name__ == "__main__":
    unittest.main()
