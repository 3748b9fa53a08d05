"""Chat endpoints module.

This module provides Flask routes for the chat room:
1. Listing the full message history
2. Sending text, image and file messages
3. Clearing the chat
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import urlencode

from flask import Blueprint, Response, current_app, jsonify, redirect, request
from pydantic import BaseModel, ConfigDict, Field

from chat_backend.src.api.utils.uploads import read_upload
from chat_backend.src.data_classes import MessageType
from chat_backend.src.services import MessageStoreService

logger = logging.getLogger(__name__)


# Schema definitions
class SendMessageRequest(BaseModel):
    """Text message request model for validation."""

    model_config = ConfigDict(populate_by_name=True)

    sender: Optional[str] = Field(None, alias="from", description="Sender label")
    message: Optional[str] = Field(None, description="Message text")


class SendFileForm(BaseModel):
    """Form fields sent alongside an uploaded image or file."""

    model_config = ConfigDict(populate_by_name=True)

    sender: Optional[str] = Field(None, alias="from", description="Sender label")
    file_name: Optional[str] = Field(
        None, alias="fileName", description="Display name overriding the upload's name"
    )


class ActionResponseModel(BaseModel):
    """Outcome of a write operation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human readable outcome")


def _request_fields() -> Dict[str, Any]:
    """Collect request fields from a form body or a JSON body."""
    if request.form:
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


def _prefers_html() -> bool:
    best = request.accept_mimetypes.best_match(
        ["application/json", "text/html"], default="application/json"
    )
    return best == "text/html"


def init_chat_routes(message_service: MessageStoreService) -> Blueprint:
    """Initialize chat routes with the provided message service.

    Args:
        message_service: Façade over the message collection

    Returns:
        Blueprint: Flask blueprint with configured chat routes.
    """
    chat_bp = Blueprint("chat", __name__)

    @chat_bp.route("/chat", methods=["GET"])
    def get_chat() -> Response:
        """Return every message, oldest first."""
        messages = message_service.list_messages()
        return jsonify([message.to_json() for message in messages])

    @chat_bp.route("/send", methods=["POST"])
    def send_message() -> Tuple[str, int]:
        """Store a text message.

        Returns:
            Empty 200 response
        """
        body = SendMessageRequest.model_validate(_request_fields())
        message_service.append_text(body.sender, body.message)
        return "", 200

    @chat_bp.route("/send-image", methods=["POST"])
    def send_image() -> Union[Response, Tuple[Response, int]]:
        """Store an uploaded image as an inline data URI.

        Browser form posts are redirected back to the chat page; API clients
        get a JSON outcome.
        """
        upload = read_upload("image", current_app.config.get("MAX_UPLOAD_BYTES"))
        form = SendFileForm.model_validate(request.form.to_dict())

        message_service.append_binary(
            MessageType.IMAGE,
            form.sender,
            upload.data,
            mime_type=upload.mime_type,
            file_name=form.file_name or upload.file_name,
            size=upload.size,
        )

        if _prefers_html():
            return redirect("/?" + urlencode({"from": form.sender or ""}))
        response = ActionResponseModel(success=True, message="Image sent")
        return jsonify(response.model_dump()), 200

    @chat_bp.route("/send-file", methods=["POST"])
    def send_file() -> Tuple[Response, int]:
        """Store an uploaded file as an inline data URI."""
        upload = read_upload("file", current_app.config.get("MAX_UPLOAD_BYTES"))
        form = SendFileForm.model_validate(request.form.to_dict())

        message_service.append_binary(
            MessageType.FILE,
            form.sender,
            upload.data,
            mime_type=upload.mime_type,
            file_name=form.file_name or upload.file_name,
            size=upload.size,
        )

        response = ActionResponseModel(success=True, message="File sent")
        return jsonify(response.model_dump()), 200

    @chat_bp.route("/clear-chat", methods=["POST"])
    def clear_chat() -> Tuple[Response, int]:
        """Delete every message."""
        deleted = message_service.clear()
        response = ActionResponseModel(
            success=True, message=f"Chat cleared ({deleted} messages deleted)"
        )
        return jsonify(response.model_dump()), 200

    return chat_bp
