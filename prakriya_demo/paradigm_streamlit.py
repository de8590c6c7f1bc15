import traceback

import streamlit as st

from prakriya_demo.engine.args import (
    DHATU_PADAS, KRT_TAB, PRAYOGAS, SANADIS, TABS, TIN_TAB,
)
from prakriya_demo.engine.display import (
    cell_padas, deva, deva_no_svara, lakara_title, paradigm_frame, prakriya_frame,
)
from prakriya_demo.engine.lipi import SCHEMES, Lipi
from prakriya_demo.engine.load_dhatus import load_dhatus
from prakriya_demo.engine.load_sutras import load_sutras
from prakriya_demo.engine.paradigm_builder import create_krdantas, create_tinantas
from prakriya_demo.engine.settings import DEFAULT_SCRIPT
from prakriya_demo.engine.state import Store
from prakriya_demo.engine.url_state import update_params
from prakriya_demo.engine.vyakarana import load_vyakarana

MAX_LISTED_DHATUS = 200

st.set_page_config(layout='wide')


@st.cache_resource(show_spinner="Loading dhatupatha and vyakarana...")
def load_resources():
    lipi = Lipi()
    return {
        "lipi": lipi,
        "catalog": load_dhatus(lipi=lipi),
        "vyakarana": load_vyakarana(),
        "sutras": load_sutras(),
    }


def get_store(res) -> Store:
    if "store" not in st.session_state:
        store = Store(res["catalog"], res["vyakarana"], script=DEFAULT_SCRIPT)
        store.restore(st.query_params.to_dict())
        store.subscribe(lambda state: update_params(st.query_params, state))
        update_params(st.query_params, store.state)
        st.session_state.store = store
    return st.session_state.store


def _optional_select(label, values, current, on_change, key):
    options = [None, *values]
    st.sidebar.selectbox(
        label,
        options,
        index=options.index(current),
        format_func=lambda v: "(any)" if v is None else v.name,
        key=key,
        on_change=lambda: on_change(st.session_state[key]),
    )


def show_sidebar(store: Store):
    s = store.state
    scripts = list(SCHEMES)
    st.sidebar.selectbox(
        "Script",
        scripts,
        index=scripts.index(s.script) if s.script in scripts else 0,
        key="script",
        on_change=lambda: store.set_script(st.session_state.script),
    )
    if s.active_dhatu is None:
        return
    _optional_select("Prayoga", PRAYOGAS, s.options.prayoga, store.set_prayoga, "prayoga")
    _optional_select("Pada", DHATU_PADAS, s.options.dhatu_pada, store.set_dhatu_pada, "dhatu_pada")
    _optional_select("Sanadi", SANADIS, s.options.sanadi, store.set_sanadi, "sanadi")
    st.sidebar.text_input(
        "Upasarga (SLP1)",
        value=s.options.upasarga or "",
        key="upasarga",
        on_change=lambda: store.set_upasarga(st.session_state.upasarga),
    )


def show_dhatu_list(store: Store, lipi: Lipi):
    st.text_input(
        "Filter dhatus",
        value=store.state.dhatu_filter or "",
        key="dhatu_filter",
        on_change=lambda: store.set_dhatu_filter(st.session_state.dhatu_filter),
    )
    script = store.state.script
    dhatus = store.filtered_dhatus()
    st.caption(f"{len(dhatus)} dhatus")
    for d in dhatus[:MAX_LISTED_DHATUS]:
        label = f"{d.code} {deva_no_svara(lipi, d.upadesha, script)} : {deva(lipi, d.artha, script)}"
        st.button(label, key=f"dhatu_{d.code}", on_click=store.set_active_dhatu, args=(d.code,))


def show_pada_buttons(store: Store, lipi: Lipi, padas, key_prefix):
    cols = st.columns(max(len(padas), 1))
    for i, p in enumerate(padas):
        cols[i].button(
            deva(lipi, p.text, store.state.script),
            key=f"{key_prefix}_{i}",
            on_click=store.set_active_pada,
            args=(p,),
        )


def show_tinantas(store: Store, lipi: Lipi):
    s = store.state
    for row in create_tinantas(store.vyakarana, s.active_dhatu, s.options):
        if not row.paradigms:
            continue
        st.subheader(lakara_title(lipi, row.lakara, s.script))
        for pada, paradigm in row.paradigms.items():
            st.markdown(f"**{pada.name}**")
            st.dataframe(paradigm_frame(lipi, paradigm, s.script), use_container_width=True)
            with st.expander("Show derivations"):
                show_pada_buttons(
                    store, lipi, cell_padas(paradigm),
                    f"tin_{row.lakara.name}_{pada.name}",
                )


def show_krdantas(store: Store, lipi: Lipi):
    s = store.state
    titles = ["Nominal", "Participles", "Avyayas"]
    for title, groups in zip(titles, create_krdantas(store.vyakarana, s.active_dhatu, s.options)):
        st.subheader(title)
        for group in groups:
            if not group.padas:
                continue
            st.markdown(f"**{group.title}**")
            show_pada_buttons(store, lipi, group.padas, f"krt_{group.title}")


def show_prakriya(store: Store, lipi: Lipi, sutras):
    s = store.state
    st.button("Back to all forms", on_click=store.clear_active_pada)
    st.header(deva(lipi, s.active_pada.text, s.script))
    if s.prakriya is None:
        st.warning("This form can no longer be derived with the current data.")
        return
    st.dataframe(prakriya_frame(lipi, sutras, s.prakriya, s.script), use_container_width=True)


def main():
    st.title("Prakriya viewer")
    try:
        res = load_resources()
    except Exception:
        st.error("Could not load the dhatupatha or the vyakarana: \n" + traceback.format_exc())
        st.stop()

    store = get_store(res)
    lipi = res["lipi"]
    show_sidebar(store)

    s = store.state
    if s.active_dhatu is None:
        show_dhatu_list(store, lipi)
        return

    d = s.active_dhatu
    st.button("All dhatus", on_click=store.clear_active_dhatu)
    st.header(f"{deva_no_svara(lipi, d.upadesha, s.script)} ({d.code})")
    st.radio(
        "Tab",
        TABS,
        index=TABS.index(s.active_tab),
        format_func=lambda t: {TIN_TAB: "Tinantas", KRT_TAB: "Krdantas"}[t],
        horizontal=True,
        key="tab",
        on_change=lambda: store.set_active_tab(st.session_state.tab),
    )

    if s.active_pada is not None:
        show_prakriya(store, lipi, res["sutras"])
    elif s.active_tab == TIN_TAB:
        show_tinantas(store, lipi)
    else:
        show_krdantas(store, lipi)


main()
