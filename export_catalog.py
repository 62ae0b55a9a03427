#!/usr/bin/env python3
"""
Catalog Export

Loads a shop and its active products from Supabase and writes a PDF
catalog, either laid out as a structured catalog or as a snapshot of the
public shop page.

Credentials come from SUPABASE_URL / SUPABASE_ANON_KEY (a .env file in
the working directory is honoured).

Usage:
    python3 export_catalog.py --shop-id 42
    python3 export_catalog.py --shop-id 42 --page-format letter --orientation landscape
    python3 export_catalog.py --shop-id 42 --no-images --output-dir exports
    python3 export_catalog.py --shop-id 42 --snapshot --element-id product-grid
    python3 export_catalog.py --shop-id 42 --log-file logs/export.log
"""

import argparse
import logging
import sys
from pathlib import Path

from storefront.backend import ProductStore, ShopStore, SupabaseAPIClient
from storefront.common import (
    load_backend_settings,
    load_export_defaults,
    load_image_timeout,
    load_settings,
    load_snapshot_settings,
    setup_logging,
)
from storefront.common.text_utils import slugify
from storefront.export import (
    CatalogPDFExporter,
    ExportError,
    HtmlRegionRasterizer,
    ImageLoader,
    SnapshotExporter,
)
from storefront.models import ExportOptions
from storefront.view import PAGE_ID, render_shop_page

logger = logging.getLogger("storefront.cli")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export a shop catalog as PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--shop-id",
        required=True,
        help="Shop to export"
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Directory for the PDF (default: output)"
    )
    parser.add_argument(
        "--page-format",
        choices=["a4", "letter"],
        help="Page format (default from config/storefront.yaml)"
    )
    parser.add_argument(
        "--orientation",
        choices=["portrait", "landscape"],
        help="Page orientation (default from config/storefront.yaml)"
    )
    parser.add_argument(
        "--no-images",
        action="store_true",
        help="Leave out banner and product images"
    )
    parser.add_argument(
        "--snapshot",
        action="store_true",
        help="Export a snapshot of the shop page instead of the structured catalog"
    )
    parser.add_argument(
        "--element-id",
        default=PAGE_ID,
        help=f"Page region to capture with --snapshot (default: {PAGE_ID})"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only warnings and errors"
    )
    parser.add_argument(
        "--log-file",
        help="Also write the log to this file"
    )
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace, settings: dict) -> ExportOptions:
    defaults = load_export_defaults(settings)
    if args.page_format:
        defaults["page_format"] = args.page_format
    if args.orientation:
        defaults["orientation"] = args.orientation
    if args.no_images:
        defaults["include_images"] = False
    return ExportOptions.from_dict(defaults)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    client = SupabaseAPIClient.from_settings(load_backend_settings())
    if not client.is_configured():
        print("Error: SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        return 1

    try:
        settings = load_settings()
        options = build_options(args, settings)

        with client:
            shop = ShopStore(client).get_shop_by_id(args.shop_id)
            if shop is None:
                print(f"Error: shop {args.shop_id} not found")
                return 1
            products = ProductStore(client).get_shop_products_public(shop.id)

        print(f"Shop: {shop.name} ({len(products)} products)")

        with ImageLoader(timeout=load_image_timeout(settings)) as loader:
            if args.snapshot:
                snapshot = load_snapshot_settings(settings)
                rasterizer = HtmlRegionRasterizer(loader, viewport_width=snapshot["viewport_width"])
                exporter = SnapshotExporter(rasterizer, scale=snapshot["scale"])
                filename = Path(args.output_dir) / f"{slugify(shop.name) or 'shop'}_{args.element_id}.pdf"
                path = exporter.export_view_to_file(render_shop_page(shop, products), args.element_id,
                                                    str(filename))
            else:
                path = CatalogPDFExporter(loader).export_to_file(shop, products, options, args.output_dir)

        print(f"PDF saved to: {path}")
        return 0

    except FileNotFoundError as e:
        print(f"\nError: {e}")
        return 1
    except ValueError as e:
        print(f"\nError: {e}")
        return 1
    except ExportError as e:
        print(f"\nExport failed, try again: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
