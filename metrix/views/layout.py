"""Page layout shared by every full page, and the home page."""

PICO_CSS_URL = "https://unpkg.com/@picocss/pico@2.0.6/css/pico.min.css"
HTMX_URL = "https://unpkg.com/htmx.org@1.9.12"

_HEAD = (
    "<html><head><title>Metrix 2025</title>"
    f'<link rel="stylesheet" href="{PICO_CSS_URL}">'
    f'<script src="{HTMX_URL}"></script>'
    "</head><body>"
    '<header class="container"><nav>'
    "<ul><li><strong>Metrix2</strong></li></ul>"
    '<ul><li><a href="/">Home</a></li>'
    '<li><a href="/metrics">Metrics</a></li>'
    '<li><a href="/entries">Entries</a></li></ul>'
    "</nav></header>"
    '<main class="container">'
)

_FOOT = (
    "</main>"
    '<footer class="container"><small>&copy; 2025 Metrix2</small></footer>'
    "</body></html>"
)


def layout(content: str) -> str:
    """Wrap already-rendered HTML in the site's page shell."""
    return f"{_HEAD}{content}{_FOOT}"


def home_page() -> str:
    """Render the welcome page."""
    return layout(
        "<h1>Metrix2</h1>"
        "<p>Welcome to Metrix2! Track your metrics with ease.</p>"
    )