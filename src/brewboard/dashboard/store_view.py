"""
Online Store view: add products to the catalog and browse it.
"""

import streamlit as st

from brewboard.services.catalog import Catalog, size_options
from brewboard.utils.constants import CATALOG_CATEGORIES, CATALOG_UNITS


def render_add_product(catalog: Catalog):
    st.markdown("### Add Product")

    # Category and unit drive the size list, so they live outside the form
    col1, col2 = st.columns(2)
    with col1:
        category = st.selectbox("Category", CATALOG_CATEGORIES, key="store_category")
    with col2:
        unit = st.selectbox("Unit", CATALOG_UNITS, key="store_unit")

    with st.form("store_product_form", clear_on_submit=True):
        name = st.text_input("Name")
        size = st.selectbox("Size", size_options(category, unit))
        col_a, col_b, col_c = st.columns(3)
        with col_a:
            price = st.text_input("Price")
        with col_b:
            sku = st.text_input("SKU")
        with col_c:
            stock = st.text_input("Stock")
        image_url = st.text_input("Image URL", placeholder="https://...")
        description = st.text_area("Description", max_chars=catalog.validator.rules['description_max_length'])
        submitted = st.form_submit_button("Add to catalog")

    if submitted:
        result = catalog.add({
            'name': name,
            'category': category,
            'unit': unit,
            'size': size,
            'price': price,
            'sku': sku,
            'stock': stock,
            'image_url': image_url,
            'description': description,
        })
        if result.is_valid:
            st.success(f"Added {result.info['product'].name}")
        else:
            for field_name, message in result.field_errors.items():
                st.error(f"{field_name}: {message}")


def render_catalog(catalog: Catalog):
    st.markdown("### Catalog")
    col1, col2, col3 = st.columns([1, 1, 1])
    with col1:
        st.metric("Total SKUs", catalog.total_skus)
    with col2:
        st.metric("Total Units", f"{catalog.total_units:,}")
    with col3:
        if st.button("Clear catalog", disabled=catalog.total_skus == 0, use_container_width=True):
            catalog.clear()
            st.rerun()

    if catalog.total_skus == 0:
        st.info("No products yet. Add your first product above.")
        return

    cols = st.columns(3)
    for i, product in enumerate(catalog.products):
        with cols[i % 3]:
            with st.container(border=True):
                if product.image_url.startswith("http"):
                    st.image(product.image_url)
                st.markdown(f"**{product.name}**")
                st.caption(f"{product.category} · {product.size} · SKU {product.sku}")
                st.markdown(f"${product.price:,.2f} · {product.stock} in stock")
                if product.description:
                    st.caption(product.description)


def render_store(config, store):
    """Render the online store page"""
    st.markdown("## 🛒 Online Store")
    catalog = Catalog(store)
    render_add_product(catalog)
    st.markdown("---")
    render_catalog(catalog)
