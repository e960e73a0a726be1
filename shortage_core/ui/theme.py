import streamlit as st

# === COLOR PALETTE ===
PRIMARY_COLOR    = "#0f766e"
SECONDARY_COLOR  = "#115e59"
SUCCESS_COLOR    = "#10b981"
WARNING_COLOR    = "#f59e0b"
DANGER_COLOR     = "#ef4444"
TEXT_COLOR       = "#1e293b"
SUBTLE_TEXT      = "#64748b"
GRID_COLOR       = "#e2e8f0"
BACKGROUND_COLOR = "#f8fafc"
CARD_BG_LIGHT    = "#ffffff"


def apply_css():
    """Shared look for the report form and the history page."""
    st.markdown(f"""
        <style>
        .main {{
            background-color: {BACKGROUND_COLOR};
            color: {TEXT_COLOR};
            font-family: 'Segoe UI','Inter',sans-serif;
        }}
        .main-header {{
            background: linear-gradient(135deg, {PRIMARY_COLOR} 0%, {SECONDARY_COLOR} 100%);
            padding: 1.4rem 1.8rem; border-radius: 16px; margin-bottom: 1.5rem; color: white;
            box-shadow: 0 8px 24px rgba(15,118,110,.25);
        }}
        .main-header h1 {{ color: white; font-size: 1.6rem; margin: 0; }}
        .main-header p {{ color: #ccfbf1; margin: .3rem 0 0 0; font-size: .85rem;
            text-transform: uppercase; letter-spacing: .12em; font-weight: 700; }}
        .item-tag {{
            display: inline-block; padding: 0 .4rem; border-radius: 6px; font-size: .7rem;
            font-weight: 700; background: #ffedd5; color: #c2410c; margin-left: .3rem;
        }}
        .stButton button {{ border-radius: 10px; font-weight: 600; }}
        .stButton button:disabled {{ background: #cbd5e1; color: {SUBTLE_TEXT}; cursor: not-allowed; }}
        h1,h2,h3,h4 {{ color: {TEXT_COLOR}; font-weight: 600; }}
        h3 {{ color: {PRIMARY_COLOR}; }}
        [data-testid="stSidebar"] {{ background-color: {CARD_BG_LIGHT}; border-right: 1px solid {GRID_COLOR}; }}
        </style>
    """, unsafe_allow_html=True)


def render_header(title: str, subtitle: str):
    """Gradient banner at the top of each page."""
    st.markdown(
        f'<div class="main-header"><h1>{title}</h1><p>{subtitle}</p></div>',
        unsafe_allow_html=True,
    )


def item_tag_html(tag: str) -> str:
    """Badge markup for [MANUAL]/[LIBRE] item tags ("" when there is no tag)."""
    return f'<span class="item-tag">{tag}</span>' if tag else ""
