"""
Melody prompt builder.

Turns a (root, scale, bars) request and its scale-note set into the chat
messages sent to the completion service. The numeric conventions in the
prompt use the same ranges the validator clamps to, so a well-behaved
model produces notes that need no repair.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from types import MappingProxyType

from chuk_mcp_melody.constants import (
    DURATION_RANGE,
    REPAIR_VELOCITY_RANGE,
    ScaleName,
)

MELODY_SYSTEM_PROMPT = (
    "You are a professional music composer who creates beautiful, scale-accurate melodies. "
    "Always return valid JSON only."
)

DEFAULT_CHARACTER = "Musical and expressive"

SCALE_CHARACTERS: MappingProxyType[str, str] = MappingProxyType(
    {
        ScaleName.MAJOR.value: "Happy, bright, uplifting feeling. Use confident, forward motion.",
        ScaleName.MINOR.value: (
            "Sad, melancholic, introspective feeling. "
            "Use descending phrases and softer dynamics."
        ),
        ScaleName.HARMONIC_MINOR.value: (
            "Exotic, dramatic, Middle-Eastern feeling. Emphasize the raised 7th scale degree."
        ),
        ScaleName.MELODIC_MINOR.value: (
            "Smooth, sophisticated, jazz-like feeling. Use flowing, stepwise motion."
        ),
        ScaleName.PENTATONIC.value: (
            "Simple, folk-like, universal feeling. Very singable and memorable."
        ),
        ScaleName.BLUES.value: (
            "Bluesy, soulful, emotional feeling. Use blue notes and expressive phrasing."
        ),
    }
)

PHRASE_OUTLINE = """EXAMPLE OF GOOD MELODY STRUCTURE:
- Opening quarter: introduce the theme, mostly stepwise, medium velocity
- Second quarter: development, add some leaps, build intensity
- Third quarter: climax, highest notes, loudest velocity
- Final quarter: resolve back to the root, slower rhythm, softer"""


def get_scale_character(scale: str) -> str:
    """Style descriptor for a scale; unknown scales get a generic one."""
    return SCALE_CHARACTERS.get(scale, DEFAULT_CHARACTER)


def note_count_range(bars: int) -> tuple[int, int]:
    """Inclusive (min, max) number of notes to ask for."""
    return bars * 3, bars * 4


def _example_output(scale_notes: Sequence[int]) -> str:
    shapes = [(1, 75), (1, 80), (0.5, 75)]
    example = [
        {"pitch": pitch, "duration": duration, "velocity": velocity}
        for pitch, (duration, velocity) in zip(scale_notes, shapes)
    ]
    return "[\n" + ",\n".join(f"  {json.dumps(note)}" for note in example) + "\n]"


def build_melody_prompt(root: str, scale: str, bars: int, scale_notes: Sequence[int]) -> str:
    """
    Build the user prompt for one melody.

    Args:
        root: Root note as given by the user (e.g., 'c', 'f#')
        scale: Scale name
        bars: Melody length in bars
        scale_notes: The permitted MIDI pitches, root first

    Returns:
        Prompt text
    """
    if not scale_notes:
        raise ValueError("scale_notes must not be empty")

    root_pitch = scale_notes[0]
    min_notes, max_notes = note_count_range(bars)
    min_dur, max_dur = DURATION_RANGE
    min_vel, max_vel = REPAIR_VELOCITY_RANGE
    allowed = ", ".join(str(p) for p in scale_notes)

    return f"""You are a professional music composer. Create a beautiful {bars}-bar melody in {root} {scale}.

CRITICAL RULES - YOU MUST FOLLOW THESE:
1. Use ONLY these MIDI note numbers (these are the {root} {scale} scale notes):
   {allowed}

2. Start on the root note: {root_pitch}
3. End on the root note: {root_pitch}
4. Create {min_notes} to {max_notes} notes total
5. Make it MUSICAL:
   - Use mostly stepwise motion (move to adjacent notes in the list above)
   - Add occasional leaps for interest (jump by 3-4 notes in the scale)
   - Create a clear phrase structure with a climax in the middle
   - Use longer notes (duration 2-4) for phrase endings
   - Use shorter notes (duration 0.5-1) for movement

6. Duration in beats, from {min_dur:g} to {max_dur:g}: 0.25 = sixteenth, 0.5 = eighth, 1 = quarter, 2 = half, 4 = whole
7. Velocity from {min_vel} to {max_vel}: {min_vel}-70 = soft, 75-85 = medium, 90-{max_vel} = loud
8. Make sure the character matches the scale:
   {get_scale_character(scale)}

{PHRASE_OUTLINE}

Return ONLY valid JSON array (no explanation):
{_example_output(scale_notes)}

Generate the melody now:"""


def build_messages(user_prompt: str, system_prompt: str = MELODY_SYSTEM_PROMPT) -> list[dict[str, str]]:
    """Wrap prompts as chat-completion messages."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
