"""End-to-end run over a small multi-module style Java project."""

from __future__ import annotations

import json

from eventmeta.cli import main

ORDER_SERVICE = """
package com.acme.app;

import com.acme.eventing.EventTrigger;
import com.acme.eventing.EventTriggers;

@EventTrigger(topic = TOPIC, eventType = "OrderCreated", version = 1, producer = "sample-app")
public class OrderService {

    public static final String TOPIC = "orders.v1";
    private static final String PREFIX = "orders.";
    static final String AUDIT = "orders.audit";

    public OrderService() {}

    @EventTrigger(topic = "orders.v1", eventType = "OrderCancelled", version = 2, description = "Emitted on cancel")
    public void cancelOrder(String orderId) {
    }

    @EventTriggers({
        @EventTrigger(topic = AUDIT, eventType = "OrderAudited"),
        @EventTrigger(topic = PREFIX + "v2", eventType = "OrderMigrated", description = "Emitted \\"once\\"")
    })
    void audit() {}

    @EventTrigger(eventType = "NoTopic")
    void broken() {}
}
"""

SHIPPING = """
package com.acme.shipping;

public interface ShippingEvents {
    @EventTrigger(topic = "shipping.v1", eventType = "Shipped", version = 3)
    void shipped();
}

enum Carrier {
    UPS;

    @com.acme.eventing.EventTrigger(topic = "carriers", eventType = "Selected")
    void select() {}
}
"""


def test_generate_end_to_end(repo_builder, capsys) -> None:
    repo_builder.write(
        {
            "com/acme/app/OrderService.java": ORDER_SERVICE,
            "com/acme/shipping/ShippingEvents.java": SHIPPING,
            "com/acme/app/README.md": "@EventTrigger(topic = \"x\", eventType = \"y\")",
        }
    )

    main(["generate", str(repo_builder.path())])

    out = capsys.readouterr().out
    assert "Wrote 6 triggers to" in out

    output = repo_builder.path() / "target" / "event-metadata.json"
    document = output.read_text(encoding="utf-8")
    assert document.endswith("}\n")
    payload = json.loads(document)
    assert payload["schemaVersion"] == "1"

    summary = [
        (t["sourceFile"].rsplit("/", 1)[-1], t["line"], t["target"], t["topic"], t["eventType"])
        for t in payload["triggers"]
    ]
    assert summary == [
        ("OrderService.java", 6, "OrderService", "orders.v1", "OrderCreated"),
        ("OrderService.java", 15, "OrderService#cancelOrder", "orders.v1", "OrderCancelled"),
        ("OrderService.java", 20, "OrderService#audit", "orders.audit", "OrderAudited"),
        ("OrderService.java", 21, "OrderService#audit", "orders.v2", "OrderMigrated"),
        ("ShippingEvents.java", 4, "ShippingEvents#shipped", "shipping.v1", "Shipped"),
        ("ShippingEvents.java", 11, "Carrier#select", "carriers", "Selected"),
    ]
    migrated = payload["triggers"][3]
    assert migrated["description"] == 'Emitted "once"'
    assert payload["triggers"][4]["version"] == 3
    assert list(payload["triggers"][0]) == [
        "sourceFile",
        "line",
        "target",
        "topic",
        "eventType",
        "version",
        "producer",
        "description",
    ]

    main(["generate", str(repo_builder.path())])
    assert output.read_text(encoding="utf-8") == document
