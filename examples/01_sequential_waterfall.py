"""Example 1: A traced checkout waterfall.

Three steps run one after another: load the cart, price it, then charge.
Each step only knows about its arguments and its continuation; tracing is
added by ``decorate_steps``.

Validates: span per step, linear parent chain, sequence tags on every span,
JSON roundtrip and console rendering.
"""

from __future__ import annotations

from typing import Any

import waterfalltracer
from waterfalltracer.renderers import render_trace
from waterfalltracer.serializers import trace_from_json, trace_to_json


def load_cart(customer_id: str, done: Any) -> None:
    done(None, customer_id, [{"sku": "tea", "price": 4.5}, {"sku": "mug", "price": 12.0}])


def price_cart(customer_id: str, items: list[dict[str, Any]], done: Any) -> None:
    done(None, customer_id, sum(item["price"] for item in items))


def charge(customer_id: str, total: float, done: Any) -> None:
    done(None, {"customer_id": customer_id, "charged": total})


def resolve_checkout(customer_id: str) -> dict[str, object]:
    return {"operationName": "checkout", "tags": {"customer_id": customer_id}}


def main() -> None:
    tracer = waterfalltracer.configure()
    stages = waterfalltracer.decorate_steps(
        resolve_checkout,
        [
            {"name": "load_cart", "handler": load_cart},
            {
                "name": "price_cart",
                "handler": price_cart,
                "get_tags": lambda customer_id, items: {"item_count": len(items)},
            },
            {"name": "charge", "handler": charge},
        ],
    )

    results: list[tuple[Any, ...]] = []
    waterfalltracer.run_waterfall(stages, lambda *args: results.append(args), "c_42")

    # -- Assertions --
    assert results == [(None, {"customer_id": "c_42", "charged": 16.5})]

    [trace] = tracer.traces()
    assert [span.name for span in trace.chain()] == [
        "checkout",
        "load_cart",
        "price_cart",
        "charge",
    ]
    assert all(span.tags["customer_id"] == "c_42" for span in trace.spans.values())
    assert trace.find("price_cart").tags["item_count"] == 2  # type: ignore[union-attr]

    restored = trace_from_json(trace_to_json(trace))
    assert restored.trace_id == trace.trace_id

    print(render_trace(trace, verbosity="full"))
    print("Example 1 PASSED: Sequential waterfall")


if __name__ == "__main__":
    main()
