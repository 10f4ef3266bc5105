"""
Photo Collage — Contact Sheet Edition

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import time

import streamlit as st
from PIL import Image, UnidentifiedImageError

from photo_collage.compose import compose
from photo_collage.config import CollageConfig
from photo_collage.layout import ImageRef
from photo_collage.render import RESAMPLE_FILTERS, encode

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Photo Collage",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = CollageConfig()

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    .stApp {
        background-color: #faf9f6;
        color: #2a2a2a;
        font-family: 'Inter', 'Helvetica Neue', sans-serif;
    }
    .block-container {
        max-width: 1000px;
        padding-top: 3.5rem;
        padding-bottom: 4rem;
    }

    .gallery-title {
        font-family: 'Cormorant Garamond', 'Georgia', serif;
        font-size: 2.8rem;
        font-weight: 300;
        letter-spacing: 0.06em;
        text-align: center;
        color: #1a1a1a;
        border-bottom: 1px solid #1a1a1a;
        padding-bottom: 0.6rem;
        margin-bottom: 0.5rem;
    }
    .gallery-subtitle {
        font-size: 0.75rem;
        font-weight: 300;
        letter-spacing: 0.04em;
        line-height: 1.8;
        margin-bottom: 3rem;
    }
    .catalogue-detail {
        font-size: 0.75rem;
        letter-spacing: 0.08em;
        text-transform: uppercase;
        text-align: center;
        margin-bottom: 2rem;
    }

    .stButton > button, .stDownloadButton > button {
        border-radius: 0px !important;
        background-color: #2a2a2a !important;
        color: #faf9f6 !important;
        letter-spacing: 0.10em;
        text-transform: uppercase;
        font-size: 0.6rem;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# -- Helpers -----------------------------------------------------------

def _load_uploads(files: list) -> tuple[list[ImageRef], list[str]]:
    """Decode uploads in upload order; return refs and skipped file names."""
    refs, skipped = [], []
    for f in files:
        try:
            img = Image.open(io.BytesIO(f.getvalue()))
            img.load()
        except (UnidentifiedImageError, OSError):
            skipped.append(f.name)
            continue
        if img.width <= _DEFAULTS.min_side or img.height <= _DEFAULTS.min_side:
            skipped.append(f.name)
            continue
        refs.append(ImageRef(width=img.width, height=img.height, image=img))
    return refs, skipped


# -- Title -------------------------------------------------------------
st.markdown(
    '<div class="gallery-title">Collage Maker</div>',
    unsafe_allow_html=True,
)
st.markdown(
    '<div class="gallery-subtitle">'
    "Upload a handful of photographs and they are laid out on a grid of "
    "square cells, left to right and top to bottom in the order you picked "
    "them. Each picture keeps its proportions: the longer side fills the "
    "cell and the shorter side is centred. "
    f"Images {_DEFAULTS.min_side} px or smaller on either side are left out."
    "</div>",
    unsafe_allow_html=True,
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2, ctrl3 = st.columns(3)
with ctrl1:
    columns = st.slider("Columns", 1, 16, _DEFAULTS.columns)
with ctrl2:
    cell_size = st.slider("Cell size (px)", 32, 512, _DEFAULTS.cell_size, step=16)
with ctrl3:
    names = list(RESAMPLE_FILTERS)
    resample = st.selectbox("Resampling", names, index=names.index(_DEFAULTS.resample))

st.markdown("---")

# -- Upload ------------------------------------------------------------
uploaded = st.file_uploader(
    "Select photographs",
    type=["jpg", "jpeg", "png", "webp", "bmp", "jfif", "tif", "tiff"],
    accept_multiple_files=True,
)

if uploaded:
    refs, skipped = _load_uploads(uploaded)
    if skipped:
        st.warning(f"Skipped {len(skipped)} file(s): {', '.join(skipped)}")

    if refs and st.button("COMPOSE", type="primary", use_container_width=True):
        cfg = CollageConfig(columns=columns, cell_size=cell_size, resample=resample)

        t0 = time.perf_counter()
        canvas, collage = compose(refs, cfg)
        elapsed = time.perf_counter() - t0

        st.image(collage, use_container_width=True)
        st.markdown(
            f'<div class="catalogue-detail">'
            f"{len(refs)} images, {canvas.columns} &times; {canvas.rows} cells, "
            f"{canvas.width} &times; {canvas.height} px"
            f"</div>",
            unsafe_allow_html=True,
        )

        _, dl_col, _ = st.columns([1, 2, 1])
        with dl_col:
            st.download_button(
                "SAVE COLLAGE",
                data=encode(collage, "PNG"),
                file_name="collage.png",
                mime="image/png",
                use_container_width=True,
            )

        m1, m2, m3 = st.columns(3)
        m1.metric("Images", f"{len(refs)}")
        m2.metric("Canvas", f"{canvas.width} × {canvas.height}")
        m3.metric("Time", f"{elapsed:.2f} s")
