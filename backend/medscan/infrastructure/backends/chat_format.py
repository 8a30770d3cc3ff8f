"""
Chat Completions Helpers

Message shape and reply extraction shared by the OpenAI-compatible adapters.
"""

from typing import Any, Dict, List

from ...domain.value_objects.image_frame import ImageFrame
from ...domain.exceptions import BackendError


def build_vision_messages(frame: ImageFrame, instruction: str) -> List[Dict[str, Any]]:
    """Build a single user message carrying the instruction and the image."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": instruction},
                {"type": "image_url", "image_url": {"url": frame.data_url}},
            ],
        }
    ]


def extract_message_content(response: Any, backend_id: str) -> str:
    """
    Get the text of the first choice of a chat completion.

    Raises:
        BackendError: If the completion has no choices or no text
    """
    choices = getattr(response, "choices", None)
    if not choices:
        raise BackendError("Completion contained no choices", backend_id=backend_id)

    content = choices[0].message.content
    if not content or not content.strip():
        raise BackendError("Backend returned an empty reply", backend_id=backend_id)

    return content
