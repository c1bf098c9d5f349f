from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from woosync.app import build_http_app_context, reset_settings, sync_order
from woosync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from woosync.app import AppContext
    from woosync.domain.order_details import OrderDetails

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise WooCommerce order data")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync-order", help="Refresh one order and print its details")
    sync.add_argument("site_id", type=int, help="Site the order belongs to")
    sync.add_argument("order_id", type=int, help="Order to synchronise")

    subparsers.add_parser("reset-settings", help="Delete every stored per-device setting")
    return parser.parse_args(argv)


def render_order_details(details: OrderDetails) -> list[str]:
    order = details.order
    lines = [f"Order #{order.number} ({order.status.value}) total {order.total} {order.currency}"]
    for item in details.aggregate_order_items:
        lines.append(f"  {item.quantity} x {item.name} = {item.total}")
    for group in details.shipping_label_groups:
        label = group.shipping_label
        state = "refunded" if group.is_refunded else label.tracking_number
        lines.append(f"  Package {group.index}: {label.service_name} [{state}]")
        lines.extend(f"    {item.quantity} x {item.name}" for item in group.order_items)
    if details.refunded_products_count:
        lines.append(f"  Refunded products: {details.refunded_products_count}")
    for refund in details.condensed_refunds:
        lines.append(f"  Refund {refund.refund_id}: {refund.total} {refund.reason}".rstrip())
    if details.shows_tracking:
        for tracking in details.trackings:
            provider = tracking.tracking_provider or "unknown provider"
            lines.append(f"  Tracking {tracking.tracking_number} via {provider}")
    return lines


async def _run(args: argparse.Namespace) -> int:
    context: AppContext = build_http_app_context()
    try:
        if args.command == "sync-order":
            result = await sync_order(context, args.site_id, args.order_id)
            for error in result.errors:
                log.warning("Sync error: %s", error)
            if result.details is None:
                log.error("Order %s was not found locally", args.order_id)
                return 1
            print("\n".join(render_order_details(result.details)))
            return 0 if not result.errors else 1
        if args.command == "reset-settings":
            errors = await reset_settings(context)
            for error in errors:
                log.warning("Reset incomplete: %s", error)
            return 0 if not errors else 1
        raise ValueError(f"Unsupported command: {args.command}")
    finally:
        aclose = getattr(context.transport, "aclose", None)
        if aclose is not None:
            await aclose()
        context.storage_manager.shutdown()


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        code = asyncio.run(_run(parsed_args))
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)
    sys.exit(code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
