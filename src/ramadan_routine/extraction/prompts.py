"""Prompt templates sent to the recognition service.

The rewrite rules in the prompt are generated from the same tables the local
adjuster uses, so the model and the post-processing step never disagree on
what a slot becomes.
"""

from collections.abc import Mapping

from ramadan_routine.schedule.time_maps import CLASS_TIME_MAP, LAB_TIME_MAP


def _format_rules(time_map: Mapping[str, str]) -> str:
    """Render a slot table as ``before  →  after`` lines."""
    return "\n".join(f"{source}  →  {target}" for source, target in time_map.items())


_PROMPT_TEMPLATE = """\
You are a schedule-processing assistant for university Ramadan timetable adjustments.

You will receive {source_description}.
One column contains time ranges like "HH:MM AM - HH:MM PM" (usually the FIRST column).
All other columns contain days, subjects, rooms, or class names.

Extract the full table VERBATIM.  Do NOT modify any column except the time column.
Replace ONLY the values in the time column using these EXACT rules:

REGULAR CLASSES:
{class_rules}

LAB CLASSES:
{lab_rules}

If a time does not match exactly, leave it unchanged.
Return ONLY a valid JSON array of objects that use the exact column headers from the table as keys, like:
[{{ "Time": "...", "Sunday": "...", "Monday": "..." }}, ...]
Do not add commentary, markdown, or any text outside the JSON array."""

TEXT_SYSTEM_PROMPT = _PROMPT_TEMPLATE.format(
    source_description="text extracted from a university class schedule PDF",
    class_rules=_format_rules(CLASS_TIME_MAP),
    lab_rules=_format_rules(LAB_TIME_MAP),
)

VISION_SYSTEM_PROMPT = _PROMPT_TEMPLATE.format(
    source_description="one or more images of a university class schedule table",
    class_rules=_format_rules(CLASS_TIME_MAP),
    lab_rules=_format_rules(LAB_TIME_MAP),
)

USER_INSTRUCTION = "Extract the schedule table and apply the Ramadan time adjustments. Return ONLY the JSON array."


def text_user_message(extracted_text: str) -> str:
    """Wrap document text in the user turn for the text-only request."""
    return f"Here is the schedule table extracted from the PDF:\n\n{extracted_text}\n\n{USER_INSTRUCTION}"
