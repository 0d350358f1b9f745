# knowyourfood/client/render.py
from __future__ import annotations

from typing import List, Optional, Union

from knowyourfood.client.session import CaptureSession, State
from knowyourfood.models import AnalysisResult

NO_SUGGESTIONS = "No health suggestions available for this item."
MSG_WAITING = "Waiting for the previous analysis to finish..."


def _num(v: Optional[Union[int, float]], unit: str = "") -> str:
    if v is None:
        return "-"
    if isinstance(v, float):
        # fixed point, never exponent notation: 95.5, 0.3, 1,234,567
        text = f"{v:,.2f}".rstrip("0").rstrip(".")
    else:
        text = f"{v:,}"
    return f"{text}{unit}"


def render_result(result: AnalysisResult) -> List[str]:
    lines = [
        f"Food:      {result.foodName or 'Unknown'}",
        f"Calories:  {_num(result.calories)}",
        "Nutrition Facts",
        f"  Carbs:   {_num(result.nutrition.carbs, 'g')}",
        f"  Protein: {_num(result.nutrition.protein, 'g')}",
        f"  Fat:     {_num(result.nutrition.fat, 'g')}",
        f"Health Rating: {result.label()}",
    ]
    if result.suggestions:
        lines.append("Health Tips")
        lines.extend(f"  • {s}" for s in result.suggestions)
    else:
        lines.append(NO_SUGGESTIONS)
    return lines


def render(session: CaptureSession) -> str:
    """Text view of the session. Reads state only."""
    state = session.state
    lines: List[str] = []

    if session.error:
        lines.append(f"Error: {session.error}")

    if state is State.IDLE:
        lines.append("Upload or capture food to get nutrition insights with AI")
    elif session.image is not None:
        lines.append(f"Selected image: {session.image.mime_type or 'unknown type'}")
        if state is State.ANALYZING:
            lines.append("Analyzing...")
        elif state is State.RESULT_READY:
            lines.extend(render_result(session.result))
        elif state is State.IMAGE_SELECTED and session.analyzing:
            # an older capture is still being analyzed; its result will be dropped
            lines.append(MSG_WAITING)
        elif state is State.IMAGE_SELECTED:
            lines.append("Ready to analyze.")

    return "\n".join(lines)
