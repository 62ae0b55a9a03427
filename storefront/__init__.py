"""
Storefront Catalog Toolkit

Modules:
    models      - Data models (Shop, Product, ExportOptions)
    common      - Shared utilities (config loader, logging, text helpers)
    backend     - Supabase record, image and identity clients
    export      - PDF catalog layout engine and snapshot export
    autosave    - Debounced persistence of shop/product edits
    view        - Public storefront HTML view
"""
