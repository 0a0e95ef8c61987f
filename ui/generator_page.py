# ui/generator_page.py
from __future__ import annotations
import json
from typing import List

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components
from loguru import logger

from core.config import config
from core.history_utils import JsonFileStorage, PasswordHistory, HistoryStorage
from core.password_utils import ConfigError, GenerationConfig, generate_many, MIN_LENGTH
from core.strength_utils import estimate_strength


class SessionStateStorage:
    """History kept in st.session_state (lost when the browser session ends)."""

    def __init__(self, state, key: str) -> None:
        self.state = state
        self.key = key

    def get(self) -> List[str]:
        return list(self.state.get(self.key, []))

    def set(self, entries: List[str]) -> None:
        self.state[self.key] = list(entries)


def _history() -> PasswordHistory:
    storage: HistoryStorage
    if config.history_backend == "session":
        storage = SessionStateStorage(st.session_state, config.history_key)
    else:
        storage = JsonFileStorage(config.history_file_path, config.history_key)
    return PasswordHistory(storage, limit=config.history_limit)

def _flash(text: str, is_error: bool = False) -> None:
    st.session_state["msg"] = (text, is_error)

def _show_flash() -> None:
    msg = st.session_state.pop("msg", None)
    if not msg:
        return
    text, is_error = msg
    (st.error if is_error else st.success)(text)


# ---------------- Actions ----------------
def _generate(history: PasswordHistory) -> None:
    gen_cfg = GenerationConfig(
        length=int(st.session_state.get("length", config.default_length)),
        include_upper=st.session_state.get("upper", True),
        include_lower=st.session_state.get("lower", True),
        include_digits=st.session_state.get("digits", True),
        include_symbols=st.session_state.get("symbols", True),
        exclude_ambiguous=st.session_state.get("exclude_amb", True),
    )
    count = int(st.session_state.get("count", 1))
    try:
        passwords = generate_many(gen_cfg, count)
    except ConfigError as e:
        logger.info("Generation rejected: {}", e)
        _flash(str(e), is_error=True)
        return

    st.session_state["password"] = passwords[0]
    st.session_state["batch"] = passwords

    # oldest first so the current password ends up on top
    try:
        for pwd in reversed(passwords):
            history.push(pwd)
    except OSError as e:
        logger.error("Cannot save history: {}", e)
        _flash(f"Cannot save history: {e}", is_error=True)
        return
    _flash("Password generated." if count == 1 else f"{count} passwords generated.")

def _use(pwd: str) -> None:
    st.session_state["password"] = pwd
    st.session_state["batch"] = [pwd]
    _flash("Password loaded from history.")

def _clear(history: PasswordHistory) -> None:
    try:
        history.clear()
    except OSError as e:
        _flash(f"Cannot clear history: {e}", is_error=True)
        return
    _flash("History cleared.")


# ---------------- Widgets ----------------
def copy_payload(passwords: List[str]) -> List[dict]:
    """Rows of the password table; Copy always uses `plain`, whatever is shown."""
    return [{"plain": p, "masked": "•" * len(p)} for p in passwords]

def _password_table(passwords: List[str], show_plain: bool) -> None:
    components.html(password_table_html(passwords, show_plain),
                    height=min(720, 110 + 36 * len(passwords)))

def password_table_html(passwords: List[str], show_plain: bool) -> str:
    """Password list with show/hide toggle and copy buttons (clipboard API + fallback)."""
    pw_data = copy_payload(passwords)
    return f"""
<style>
  :root {{ color-scheme: light dark; }}
  .pw-shown {{ color: #111827; }}
  @media (prefers-color-scheme: dark) {{
    .pw-shown {{ color: #e5e7eb; }}
  }}
  table#pwtable {{ border-collapse: collapse; width: 100%; border: 1px solid #e5e7eb; }}
  td {{ padding: 6px 10px; }}
  @media (prefers-color-scheme: dark) {{
    table#pwtable {{ border-color: #374151; }}
  }}
  button.cpy {{
    background:#2563eb; border:none; color:#fff; padding:6px 10px; border-radius:6px; cursor:pointer;
  }}
  #toggle {{
    padding:6px 10px; border:1px solid #d1d5db; border-radius:8px; cursor:pointer; background:#fff;
  }}
  @media (prefers-color-scheme: dark) {{
    #toggle {{ background:#0b0f19; border-color:#374151; color:#e5e7eb; }}
  }}
</style>

<div style="font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif;">
  <div style="margin:6px 0 10px;"><button id="toggle"></button></div>
  <table id="pwtable"><tbody id="pwbody"></tbody></table>
</div>

<script>
const data = {json.dumps(pw_data)};
let showPlain = {str(bool(show_plain)).lower()};

const tbody = document.getElementById("pwbody");
const toggleBtn = document.getElementById("toggle");

function renderRows() {{
  tbody.innerHTML = "";
  data.forEach((item) => {{
    const tr = document.createElement("tr");
    const tdPwd = document.createElement("td");
    tdPwd.style.fontFamily = "ui-monospace,Consolas,Monaco,monospace";
    tdPwd.className = "pw-shown";
    tdPwd.textContent = showPlain ? item.plain : item.masked;

    const tdBtn = document.createElement("td");
    tdBtn.style.textAlign = "right";
    const btn = document.createElement("button");
    btn.className = "cpy";
    btn.textContent = "Copy";
    btn.dataset.pw = item.plain;
    tdBtn.appendChild(btn);

    tr.appendChild(tdPwd);
    tr.appendChild(tdBtn);
    tbody.appendChild(tr);
  }});
  toggleBtn.textContent = showPlain ? "🙈 Hide" : "👁 Show";
}}
renderRows();

function copyText(text) {{
  if (navigator.clipboard && window.isSecureContext) {{
    return navigator.clipboard.writeText(text);
  }}
  const ta = document.createElement('textarea');
  ta.value = text;
  ta.style.position = 'fixed';
  ta.style.opacity = '0';
  document.body.appendChild(ta);
  ta.focus();
  ta.select();
  try {{ document.execCommand('copy'); }}
  finally {{ document.body.removeChild(ta); }}
  return Promise.resolve();
}}

document.getElementById("pwtable").addEventListener("click", (e) => {{
  const btn = e.target.closest("button.cpy");
  if (!btn) return;
  copyText(btn.dataset.pw || "").then(() => {{
    const old = btn.textContent;
    btn.textContent = "Copied";
    setTimeout(() => btn.textContent = old, 900);
  }}).catch(() => {{
    alert("Clipboard blocked by browser");
  }});
}});

toggleBtn.addEventListener("click", () => {{
  showPlain = !showPlain;
  renderRows();
}});
</script>
"""

def _strength_bar(password: str) -> None:
    result = estimate_strength(password)
    st.progress(result.percent / 100, text=f"Strength: **{result.label}** ({result.score}/10)")


# ---------------- Page ----------------
def render() -> None:
    st.subheader("🔐 Password Generator")
    history = _history()

    colL, colR = st.columns([3, 2])
    with colL:
        st.slider("Password length", MIN_LENGTH, config.max_length, config.default_length, 1, key="length")
        st.number_input("Quantity", min_value=1, max_value=50, value=1, step=1, key="count")
        show_plain = st.checkbox("Show characters (unmasked)", value=False, key="show_plain")
    with colR:
        st.markdown("**Character sets**")
        st.checkbox("A–Z", value=True, key="upper")
        st.checkbox("a–z", value=True, key="lower")
        st.checkbox("0–9", value=True, key="digits")
        st.checkbox("Symbols", value=True, key="symbols")

        st.markdown("**Filters**")
        st.checkbox("Exclude ambiguous (O 0 I l 1 | ` ' \" \\)", value=True, key="exclude_amb")

    st.button("🎲 Generate", type="primary", use_container_width=True, key="generate",
              on_click=_generate, args=(history,))

    # First visit: start with a fresh password
    if "password" not in st.session_state:
        _generate(history)

    _show_flash()

    password = st.session_state.get("password", "")
    if password:
        _password_table(st.session_state.get("batch") or [password], show_plain)
    else:
        st.error("Generate a password first.")
    _strength_bar(password)

    _history_section(history, show_plain)

def _history_section(history: PasswordHistory, show_plain: bool) -> None:
    st.markdown("#### 🕘 History")
    entries = history.entries()
    if not entries:
        st.caption("No passwords yet.")
        return

    _password_table(entries, show_plain)

    cols = st.columns(5)
    for i, pwd in enumerate(entries):
        with cols[i % 5]:
            st.button(f"Use #{i + 1}", key=f"use_{i}", on_click=_use, args=(pwd,))

    with st.expander("Strength overview"):
        rows = []
        for i, pwd in enumerate(entries, start=1):
            res = estimate_strength(pwd)
            rows.append({"#": i, "Length": len(pwd), "Score": res.score, "Label": res.label})
        st.dataframe(pd.DataFrame(rows).set_index("#"), use_container_width=True)

    st.button("🗑 Clear history", key="clear_history", on_click=_clear, args=(history,))
