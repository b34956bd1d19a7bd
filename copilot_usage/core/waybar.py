"""One-shot status bar output for Waybar."""

from pydantic import BaseModel, ConfigDict, Field

from copilot_usage.core.constants import UsageThresholds
from copilot_usage.models.usage import UsageStats


class WaybarOutput(BaseModel):
    """JSON object understood by Waybar custom modules."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    tooltip: str
    css_class: str = Field(alias="class")


def get_css_class(percentage: float) -> str:
    if percentage >= UsageThresholds.CRITICAL:
        return "copilot-critical"
    if percentage >= UsageThresholds.WARNING:
        return "copilot-warning"
    if percentage >= UsageThresholds.NORMAL:
        return "copilot-normal"
    return "copilot-low"


def format_text(stats: UsageStats, template: str) -> str:
    """Fill the user's template placeholders."""
    replacements = {
        "{percentage}": str(int(stats.percentage)),
        "{used}": f"{stats.total_used:.0f}",
        "{limit}": f"{stats.total_limit:.0f}",
        "{remaining}": f"{stats.remaining:.0f}",
        "{cost}": f"{stats.estimated_cost:.2f}",
    }
    text = template
    for placeholder, value in replacements.items():
        text = text.replace(placeholder, value)
    return text


def format_tooltip(stats: UsageStats) -> str:
    lines = [
        "GitHub Copilot Usage",
        f"{stats.total_used:.0f} / {stats.total_limit:.0f} ({stats.percentage:.1f}%)",
        f"Resets: {stats.reset_date.strftime('%B %d, %Y at %H:%M UTC')}",
    ]

    if stats.models:
        lines.append("")
        lines.append("Per-model usage:")
        lines.extend(f"  {model.name}: {model.used:.0f} ({model.percentage:.1f}%)" for model in stats.models)

    if stats.estimated_cost > 0:
        lines.append("")
        lines.append(f"Estimated cost: ${stats.estimated_cost:.2f}")

    return "\n".join(lines)


def generate_output(stats: UsageStats, template: str) -> str:
    """Render stats as a Waybar JSON line."""
    output = WaybarOutput(
        text=format_text(stats, template),
        tooltip=format_tooltip(stats),
        css_class=get_css_class(stats.percentage),
    )
    return output.model_dump_json(by_alias=True)
