"""
HTML document wrapper for the rendered description.
"""

from html import escape

from vindu.prefixes import PrefixCompactor


def _prefix_header(base: str, compactor: PrefixCompactor) -> str:
    lines = [f"@base &lt;{escape(base)}/&gt; ."]
    for token, namespace in compactor.declarations():
        lines.append(f"@prefix {escape(token)} &lt;{escape(namespace)}&gt; .")
    return "\n".join(lines) + "\n\n"


def render_document(
    path: str,
    iri: str,
    tree: str,
    base: str,
    compactor: PrefixCompactor,
) -> str:
    """
    Wrap a formatted description in a complete HTML page.

    ``tree`` must already be HTML-safe; ``path`` is the requested path
    without its leading slash and is shown as the heading.
    """
    return (
        f"<html><head><title>&lt;{escape(iri)}&gt;</title></head><body><pre>"
        + _prefix_header(base, compactor)
        + f"<strong>&lt;{escape(path)}&gt;</strong>\n"
        + tree
        + " .\n"
        + "</pre></body></html>"
    )
