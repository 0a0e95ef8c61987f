import streamlit as st

from core.config import config

def render():
    st.markdown(
        """
        <style>
          @import url('https://fonts.googleapis.com/css2?family=Dancing+Script:wght@600;700&display=swap');

          .calligraphy-title{
            font-family: "Dancing Script",cursive;
            font-size: 56px;
            line-height: 1.1;
            margin: .2em 0 .1em 0;
          }
          @media (max-width: 768px){
            .calligraphy-title{ font-size: 38px; }
          }
          @media (prefers-color-scheme: dark){
            .calligraphy-title{ color: #f3f4f6; }
          }
        </style>
        """,
        unsafe_allow_html=True,
    )

    st.markdown(
        '<div class="calligraphy-title">Password Generator 🔑</div>',
        unsafe_allow_html=True,
    )

    st.markdown(
        "Random passwords from the OS secure random source, "
        "with a quick strength estimate and a local history of the last "
        f"{config.history_limit} passwords."
    )

    st.info("Open **Generator** in the sidebar to start.")
