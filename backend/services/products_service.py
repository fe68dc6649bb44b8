import json
import logging
import random

from platform_client import GraphqlClient, GraphqlQueryError, PlatformSession, RestClient

logger = logging.getLogger("checkout-customizations")

DEFAULT_PRODUCTS_COUNT = 5

ADJECTIVES = [
    "autumn",
    "hidden",
    "bitter",
    "misty",
    "silent",
    "empty",
    "dry",
    "dark",
    "summer",
    "icy",
    "delicate",
    "quiet",
    "white",
    "cool",
    "spring",
    "winter",
    "patient",
    "twilight",
    "dawn",
    "crimson",
    "wispy",
    "weathered",
    "blue",
    "billowing",
    "broken",
    "cold",
    "damp",
    "falling",
    "frosty",
    "green",
    "long",
]

NOUNS = [
    "waterfall",
    "river",
    "breeze",
    "moon",
    "rain",
    "wind",
    "sea",
    "morning",
    "snow",
    "lake",
    "sunset",
    "pine",
    "shadow",
    "leaf",
    "dawn",
    "glitter",
    "forest",
    "hill",
    "cloud",
    "meadow",
    "sun",
    "glade",
    "bird",
    "brook",
    "butterfly",
    "bush",
    "dew",
    "dust",
    "field",
    "fire",
    "flower",
]

CREATE_PRODUCT_MUTATION = """
mutation populateProduct($input: ProductInput!) {
  productCreate(input: $input) {
    product {
      id
    }
  }
}
"""


class ProductCreationError(RuntimeError):
    pass


def random_title() -> str:
    return f"{random.choice(ADJECTIVES)} {random.choice(NOUNS)}"


def random_price() -> float:
    return round(random.random() * 10, 2)


async def count_products(session: PlatformSession) -> int:
    data = await RestClient(session).get("products/count.json")
    return int(data.get("count", 0))


async def create_products(
    session: PlatformSession, count: int = DEFAULT_PRODUCTS_COUNT
) -> None:
    client = GraphqlClient(session)
    try:
        for _ in range(count):
            await client.query(
                CREATE_PRODUCT_MUTATION,
                {
                    "input": {
                        "title": random_title(),
                        "variants": [{"price": random_price()}],
                    }
                },
            )
    except GraphqlQueryError as exc:
        detail = json.dumps(exc.response, indent=2, default=str)
        raise ProductCreationError(f"{exc}\n{detail}") from exc
