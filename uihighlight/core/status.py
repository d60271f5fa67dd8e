"""Batch status identifiers and the idle-state status table."""

from __future__ import annotations

from enum import Enum


class StatusMessage(Enum):
    """Aggregate status of a highlight batch."""

    NO_MESSAGE = "no_message"
    PROMPT_XML_AND_SCREENSHOT = "prompt_xml_and_screenshot"
    PROMPT_XML = "prompt_xml"
    PROMPT_SCREENSHOT = "prompt_screenshot"
    FILE_COUNT_MISMATCH = "file_count_mismatch"
    PROMPT_GENERATE = "prompt_generate"
    IN_PROGRESS = "in_progress"
    TITLE_MISMATCH = "title_mismatch"
    DONE = "done"
    FAILED = "failed"

    @property
    def text(self) -> str:
        """User-facing message for this status."""
        return MESSAGES[self]


MESSAGES: dict[StatusMessage, str] = {
    StatusMessage.NO_MESSAGE: "",
    StatusMessage.PROMPT_XML_AND_SCREENSHOT: "Please upload Screenshot(s) and XML file(s) to view results",
    StatusMessage.PROMPT_XML: "Please upload corresponding XML file(s) to view results",
    StatusMessage.PROMPT_SCREENSHOT: "Please upload corresponding Screenshot(s) to view results",
    StatusMessage.FILE_COUNT_MISMATCH: (
        "Error: Different amounts of Screenshots and XMLs provided. "
        "Please ensure all files were uploaded."
    ),
    StatusMessage.PROMPT_GENERATE: "Press “Generate Highlights” to view results",
    StatusMessage.IN_PROGRESS: "Generating highlights…",
    StatusMessage.TITLE_MISMATCH: (
        "Error: Not every provided Screenshot had a corresponding XML, or vice-versa. "
        "Please double check the file names and try again."
    ),
    StatusMessage.DONE: "Done!",
    StatusMessage.FAILED: "Error: Some highlights could not be generated. See the failed pairs for details.",
}


def loading_message(name: str) -> str:
    """Placeholder text shown while a pair is being processed."""
    return f"Loading {name}…"


def compute_idle_status(screenshot_count: int, dump_count: int) -> StatusMessage:
    """Status shown before a run, derived from the upload counts alone."""
    has_screenshot = screenshot_count > 0
    has_xml = dump_count > 0

    if has_screenshot and has_xml:
        if screenshot_count != dump_count:
            return StatusMessage.FILE_COUNT_MISMATCH
        return StatusMessage.PROMPT_GENERATE
    if has_screenshot:
        return StatusMessage.PROMPT_XML
    if has_xml:
        return StatusMessage.PROMPT_SCREENSHOT
    return StatusMessage.PROMPT_XML_AND_SCREENSHOT
