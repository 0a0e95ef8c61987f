# app.py
from pathlib import Path
import sys
import importlib
import streamlit as st

# ==== Paths & sys.path ====
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.config import config, setup_logging
from loguru import logger

@st.cache_resource
def _init_logging() -> bool:
    setup_logging(config)
    return True

_init_logging()

# ==== Streamlit ====
st.set_page_config(
    page_title="VLabs Password Generator",
    page_icon="🔑",
    layout="wide",
)

# ==== Pages ====
required_modules = {
    "generator_page":  "🔐 Generator",
    "mainwindow_page": "🏠 Home",
}

PAGES = {}
errors = []

for mod_name, label in required_modules.items():
    try:
        mod = importlib.import_module(f"ui.{mod_name}")
    except ImportError as e:
        logger.exception("Cannot import ui.{}", mod_name)
        errors.append(f"Cannot import 'ui.{mod_name}': {e}")
        continue
    render_fn = getattr(mod, "render", None)
    if callable(render_fn):
        PAGES[label] = render_fn
    else:
        errors.append(f"Module 'ui.{mod_name}' has no render() function.")

# Show errors but keep the remaining pages usable
for msg in errors:
    st.error(msg)
if not PAGES:
    st.stop()

# ==== Sidebar navigation ====
choice = st.sidebar.radio(" ", list(PAGES.keys()), key="page")
PAGES[choice]()
