from .theme import apply_css, render_header, item_tag_html

__all__ = ["apply_css", "render_header", "item_tag_html"]
