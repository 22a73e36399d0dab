"""
streamlit_app.py — Field Guide Entry Point
-------------------------------------------

Launch with:  streamlit run streamlit_app.py

Pages:
- Search: free-text keyword search across bugs, animals and plants
- Browse: per-category image galleries
- Details: descriptive sections for a selected image

Project: Field Guide
"""

import streamlit as st

st.set_page_config(page_title="Field Guide", page_icon="🐞", layout="wide")

pages = st.navigation([
    st.Page("app/search_ui.py", title="Search", icon="🔎", default=True),
    st.Page("app/browse_ui.py", title="Browse", icon="🗂️"),
    st.Page("app/detail_ui.py", title="Details", icon="📄"),
])
pages.run()
