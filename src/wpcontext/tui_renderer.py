from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from wpcontext.contexts import ALL_CONTEXTS, Context
from wpcontext.interfaces import ContextData

WPCONTEXT_THEME = Theme(
    {
        "header": "bold blue",
        "active": "bold green",
        "inactive": "dim white",
        "overlay": "bold cyan",
        "warning": "bold yellow",
        "label": "dim cyan",
    }
)

OVERLAY_CONTEXTS = frozenset({Context.CORE, Context.CLI, Context.WP_ACTIVATE})


class ContextRenderer:
    """Renders a context classification as a Rich panel and flag table."""

    def __init__(
        self,
        data: ContextData,
        *,
        pending_hooks: tuple[str, ...] = (),
        console: Optional[Console] = None,
    ):
        self.data = data
        self.pending_hooks = pending_hooks
        self.console = console or Console(theme=WPCONTEXT_THEME)

    def render(self) -> None:
        self.render_header()
        self.render_flags()
        if self.pending_hooks:
            self.render_pending_hooks()

    def active_contexts(self) -> list[str]:
        return [context.value for context in ALL_CONTEXTS if self.data.get(context.value)]

    def render_header(self) -> None:
        active = self.active_contexts()
        summary = Text(", ".join(active) if active else "no context detected", style="active")
        self.console.print(
            Panel(
                summary,
                title="[header]WordPress Request Context[/header]",
                border_style="blue",
                box=box.ROUNDED,
            )
        )

    def render_flags(self) -> None:
        table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="header")
        table.add_column("Context", style="label")
        table.add_column("Kind")
        table.add_column("Value", justify="center")

        for context in ALL_CONTEXTS:
            value = bool(self.data.get(context.value))
            kind = "overlay" if context in OVERLAY_CONTEXTS else "request"
            table.add_row(
                context.value,
                Text(kind, style="overlay" if kind == "overlay" else "inactive"),
                Text("yes" if value else "no", style="active" if value else "inactive"),
            )

        self.console.print(table)

    def render_pending_hooks(self) -> None:
        self.console.print(
            Text(
                "Pending late corrections: " + ", ".join(self.pending_hooks),
                style="warning",
            )
        )
