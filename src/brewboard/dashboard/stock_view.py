"""
Stock Management view: tomorrow's readiness, product coverage, recipe
materials and the add-product draft form.
"""

from datetime import date

import streamlit as st

from brewboard.dashboard import charts
from brewboard.services.stock import (
    DraftBook,
    default_products,
    default_raw_materials,
    inventory_status,
    missing_materials,
    order_message,
    readiness,
    recipe_status,
    variant_labels,
)
from brewboard.utils.constants import DRAFT_CATEGORIES, MAX_DRAFT_IMAGES


def render_readiness(products, raws, today):
    st.markdown("#### Tomorrow Required & Coverage")
    table = readiness(products, raws, today)
    short = int((table['status'] == 'Short').sum())
    st.caption(f"{short} of {len(table)} products cannot cover tomorrow's estimate")
    st.plotly_chart(charts.readiness_chart(table), use_container_width=True)


def render_products(products, raws):
    """Products table plus the recipe breakdown for the selected product"""
    st.markdown("#### Products")
    status = inventory_status(products, raws)
    st.dataframe(
        status[['name', 'category', 'coverage', 'status']],
        hide_index=True,
        use_container_width=True
    )

    names = {p.id: p.name for p in products}
    selected_id = st.selectbox(
        "Click any product to see required raw materials",
        options=[None] + list(names),
        format_func=lambda pid: "Select a product" if pid is None else names[pid],
        key="stock_selected"
    )

    st.markdown("#### Raw Materials")
    if selected_id is None:
        st.caption("No product selected.")
        return

    product = next(p for p in products if p.id == selected_id)
    st.caption(product.name)
    auto_order = st.toggle("Auto-order missing", key="stock_auto_order")

    recipe = recipe_status(product, raws)
    st.dataframe(
        recipe[['material', 'required', 'in_stock', 'status']],
        hide_index=True,
        use_container_width=True
    )

    missing = missing_materials(product, raws)
    if not missing:
        st.success("All materials ready")
    for item in missing:
        col_a, col_b = st.columns([3, 1])
        with col_a:
            st.markdown(f"**{item.raw.name}**: short by {item.needed:g} {item.raw.unit}")
        with col_b:
            if st.button("Order Now", key=f"order_{item.raw.id}", use_container_width=True):
                st.toast(order_message(item.raw, auto_order))


def render_draft_form(store):
    """Add Product form; prices per size variant of the chosen category"""
    book = DraftBook(store)
    with st.expander("➕ Add Product"):
        category = st.selectbox("Category", DRAFT_CATEGORIES, key="draft_category")
        with st.form("draft_form", clear_on_submit=True):
            name = st.text_input("Product name")
            description = st.text_area("Description")
            price_cols = st.columns(3)
            prices = {}
            for col, label in zip(price_cols, variant_labels(category)):
                with col:
                    prices[label] = st.text_input(f"Price ({label})")
            uploads = st.file_uploader(
                f"Images (up to {MAX_DRAFT_IMAGES})",
                type=['png', 'jpg', 'jpeg', 'webp'],
                accept_multiple_files=True
            )
            submitted = st.form_submit_button("Submit")

        if submitted:
            images = [f.name for f in uploads or []]
            result = book.submit(name, description, category, prices, images)
            for warning in result.warnings:
                st.warning(warning)
            if result.is_valid:
                st.success(f"Draft saved: {result.info['draft'].name}")
            else:
                for error in result.errors:
                    st.error(error)

        drafts = book.load()
        if drafts:
            st.caption(f"{len(drafts)} draft(s) saved")
            st.dataframe(
                [{'name': d.name, 'category': d.category, 'submitted': d.submitted_at[:16]} for d in drafts],
                hide_index=True,
                use_container_width=True
            )


def render_stock(config, store):
    """Render the stock management page"""
    st.markdown("## 📦 Stock Management")
    today = date.today()
    products = default_products()
    raws = default_raw_materials()

    render_draft_form(store)
    render_readiness(products, raws, today)
    st.markdown("---")
    render_products(products, raws)
