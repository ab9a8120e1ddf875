import logging
from datetime import datetime, timezone

import plotly.express as px
import streamlit as st
from jinja2 import Template

from config import APP_NAME, DEFAULTS, configure_logging
from formatters import changed_positions, format_abbr_money, format_money, split_digits
from scenario import FirePlan
from storage import ConfigStore

logger = logging.getLogger(__name__)

# -----------------------------------------------
# Flip-digit display
# -----------------------------------------------
FLIP_TEMPLATE = Template("""
<style>
.flip-row { display: flex; align-items: center; font-size: 3.2rem; font-weight: bold; margin-bottom: 8px; }
.flip-digit { display: inline-block; min-width: 1.2em; text-align: center; background: #222; color: #fff;
              border-radius: 6px; margin: 0 2px; box-shadow: 0 1px 3px rgba(0,0,0,0.08); }
.flip-digit.changed { animation: flip 0.3s ease-out; }
@keyframes flip { from { transform: rotateX(90deg); opacity: 0; } to { transform: rotateX(0); opacity: 1; } }
</style>
<div class="flip-row">
{%- for glyph in glyphs %}
<span class="flip-digit{% if glyph.changed %} changed{% endif %}">{{ glyph.char }}</span>
{%- endfor %}
</div>
""")


def render_flip_number(key, num, abbr=False):
    """
    Draws 'num' as flip tiles. Tiles whose glyph differs from the previous
    render under the same key get the flip animation.
    """
    text = format_abbr_money(num) if abbr else format_money(num)
    state_key = f"prev_digits_{key}"
    previous = "".join(st.session_state.get(state_key, []))
    changed = changed_positions(previous, text)
    glyphs = [{"char": ch, "changed": i in changed} for i, ch in enumerate(split_digits(text))]
    st.markdown(FLIP_TEMPLATE.render(glyphs=glyphs), unsafe_allow_html=True)
    st.session_state[state_key] = split_digits(text)


# -----------------------------------------------
# Session setup
# -----------------------------------------------
def get_plan():
    if "plan" not in st.session_state:
        store = ConfigStore()
        st.session_state.store = store
        st.session_state.plan = FirePlan.from_config(store.load())
    return st.session_state.plan


def persist(plan):
    st.session_state.store.save(plan.to_config())


# -----------------------------------------------
# Settings forms
# -----------------------------------------------
def base_settings_form(plan):
    with st.sidebar.expander("⚙️ 基本参数", expanded=False):
        with st.form("base_params"):
            deposit = st.number_input("当前存款（元）", min_value=0.0, value=float(plan.deposit), step=1000.0)
            annual_income = st.number_input("年收入（元）", min_value=0.0, value=float(plan.annual_income), step=1000.0)
            if st.form_submit_button("保存"):
                plan.update_base(deposit, annual_income)
                persist(plan)
                logger.info("Base parameters updated: deposit=%s income=%s", deposit, annual_income)


def life_style_form(plan):
    life_style = plan.life_style
    with st.sidebar.expander("✏️ 编辑生活方式", expanded=False):
        with st.form("life_style"):
            desc = st.text_area("生活方式描述", value=life_style.desc, height=68)
            year_cost = st.number_input("每年开销（元）", min_value=0.0, value=float(life_style.year_cost), step=1000.0)
            interest_rate = st.number_input("年化利率（%）", min_value=0.0, max_value=100.0,
                                            value=float(life_style.interest_rate), step=0.01)
            inflation_rate = st.number_input("通货膨胀率（%）", min_value=0.0, max_value=100.0,
                                             value=float(life_style.inflation_rate), step=0.01)
            if st.form_submit_button("保存"):
                plan.update_life_style(desc, year_cost, interest_rate, inflation_rate)
                persist(plan)
                logger.info("Life style updated: %s", plan.life_style)


# -----------------------------------------------
# Live figures
# -----------------------------------------------
@st.fragment(run_every=DEFAULTS["refresh_seconds"])
def live_figures(plan):
    now = datetime.now(timezone.utc)

    st.subheader("实时存款")
    st.caption(f"工资每秒增加：￥{plan.salary_per_second():.4f}")
    render_flip_number("deposit", plan.current_deposit(now))

    life_style = plan.life_style
    st.subheader(f"以{life_style.interest_rate:g}%利率可生活年数")
    st.caption(f"{life_style.desc} · 年开销：￥{format_money(life_style.year_cost)}")
    render_flip_number("years", round(plan.support_years(now), 2))


def charts(plan):
    now = datetime.now(timezone.utc)

    st.subheader("存款变化")
    table = plan.depletion_table(now)
    if table.empty:
        st.info("当前设置下无需模拟。")
    else:
        fig_balance = px.line(table, x="Year", y="Balance", title="Year-end Balance")
        fig_balance.add_traces(px.bar(table, x="Year", y="Cost").data)
        fig_balance.update_layout(yaxis_title="Balance (¥)")
        st.plotly_chart(fig_balance, use_container_width=True)
        with st.expander("逐年明细", expanded=False):
            st.dataframe(table.style.format({
                "Income": format_money,
                "Cost": format_money,
                "Balance": format_money,
                "Fraction": "{:.3f}",
            }))

    if plan.life_style.year_cost > 0:
        st.subheader("开销敏感度")
        sensitivity = plan.cost_sensitivity(now)
        fig_sens = px.line(sensitivity, x="Yearly Cost", y="Years", title="Years Supported vs. Yearly Cost")
        st.plotly_chart(fig_sens, use_container_width=True)


# --------------------------------------------------
# Streamlit App
# --------------------------------------------------
def main():
    configure_logging()
    st.set_page_config(page_title=APP_NAME, layout="centered")
    st.title(APP_NAME)

    plan = get_plan()
    base_settings_form(plan)
    life_style_form(plan)

    live_figures(plan)
    charts(plan)


if __name__ == "__main__":
    main()
