import json
from fastapi.testclient import TestClient
from exchange.main import create_app
from exchange.core.config import Settings

"""Smoke script for the calculator screen against the offline 'static' provider.

Sequence:
 1. Appear (first quote load).
 2. Enter an amount with junk characters and compute.
 3. Switch the pair to JPY -> PHP (amount resets, result hidden).
 4. Compute with an amount above the ceiling (wrong value alert), dismiss.
"""


def run():
    settings = Settings(exchange_rate_provider="static")
    settings.init_post_load()
    client = TestClient(create_app(settings_override=settings))
    output = {}

    output["appear"] = client.post("/screen/appear").json()
    client.put("/screen/amount", json={"text": "12a5.5"})
    output["computed"] = client.post("/screen/compute").json()
    output["pair_changed"] = client.put(
        "/screen/pair", json={"source": "JPY", "destination": "PHP"}
    ).json()
    client.put("/screen/amount", json={"text": "10000.01"})
    output["too_large"] = client.post("/screen/compute").json()
    output["dismissed"] = client.post("/screen/dismiss").json()

    print(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    run()
