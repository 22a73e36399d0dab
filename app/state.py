"""
state.py — Shared Streamlit State for the Field Guide Pages
------------------------------------------------------------

Holds the process-scoped FieldGuide (index, detail data and manifest caches)
and the session keys the pages use to hand an image over to the detail view.

Project: Field Guide
"""

import streamlit as st
from PIL import Image, UnidentifiedImageError
from config import settings
from core.service import build_field_guide
from tools.manifest_builder import ManifestBuilder

DETAIL_PAGE = "app/detail_ui.py"


@st.cache_resource
def get_field_guide():
    """
    Build the FieldGuide once per server process.
    """
    refresher = ManifestBuilder(settings.ASSET_ROOT, image_dir=settings.IMAGE_DIR) if not settings.ASSET_BASE_URL else None
    return build_field_guide(settings, refresher=refresher)


def init_session_state():
    for key, default in {
        "search_query": "",
        "search_scope": "All",
        "search_submitted": False,
        "detail_path": None,
        "browse_category": None,
    }.items():
        if key not in st.session_state:
            st.session_state[key] = default


def image_source(path):
    """
    Image for st.image: a URL when assets are served over HTTP, otherwise the
    opened local file. Returns None when the image is missing or unreadable.
    """
    if not path:
        return None
    if settings.ASSET_BASE_URL:
        return settings.ASSET_BASE_URL.rstrip("/") + "/" + path.lstrip("/")
    img_path = settings.ASSET_ROOT / path
    if not img_path.exists():
        return None
    try:
        return Image.open(img_path)
    except (OSError, UnidentifiedImageError):
        return None


def open_detail(path):
    st.session_state.detail_path = path
    st.switch_page(DETAIL_PAGE)
