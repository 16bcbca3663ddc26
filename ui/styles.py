from __future__ import annotations

import streamlit as st

APP_CSS = r"""
/* Dark canvas so water/land tiles read like the desktop viewer */
[data-testid="stAppViewContainer"] {
  background: linear-gradient(180deg, #0b0f14 0%, #111827 100%);
  color: #e5e7eb;
}

h1, h2, h3 {
  letter-spacing: -0.02em;
}

[data-testid="stSidebar"] {
  border-right: 1px solid rgba(229, 231, 235, 0.08);
}

/* Sliders get a bit more air between them */
[data-testid="stSidebar"] [data-testid="stVerticalBlock"] {
  gap: 1.1rem;
}

[data-testid="stMetricValue"] {
  font-variant-numeric: tabular-nums;
}
"""


def inject_global_styles() -> None:
    st.markdown(f"<style>{APP_CSS}</style>", unsafe_allow_html=True)
