# src/storefront/ui.py

from rich.align import Align
from rich.panel import Panel
from rich.text import Text

from .core.config import StoreConfig
from .core.logging import console


def print_welcome(config: StoreConfig, host: str, port: int) -> None:
    """Startup banner with the docs and API base URLs."""
    base_url = f"http://{host}:{port}"
    media = "cloudinary" if config.media.configured else "placeholder images"
    message = Text.from_markup(
        f"Docs: [link={base_url}/docs]{base_url}/docs[/link]\n"
        f"API:  {base_url}{config.api_prefix}\n"
        f"Media: {media}"
    )
    console.print(
        Panel(
            Align.left(message),
            title=f"[bold green]{config.project_name} v{config.version}[/bold green]",
            border_style="blue",
            padding=(1, 2),
        )
    )
