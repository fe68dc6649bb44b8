"""
Create-then-configure flow for checkout customizations.

A customization is created first; its function configuration is then
written as a JSON metafield owned by the new record. The second call is
only issued once the first has succeeded.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel

from platform_client import GraphqlClient, GraphqlQueryError
from schemas import DeliveryCustomizationRequest, PaymentCustomizationRequest

logger = logging.getLogger("checkout-customizations")

CONFIGURATION_KEY = "function-configuration"

DELIVERY_CUSTOMIZATION_CREATE = """
mutation DeliveryCustomizationCreate($input: DeliveryCustomizationInput!) {
  deliveryCustomizationCreate(deliveryCustomization: $input) {
    deliveryCustomization {
      id
    }
    userErrors {
      message
    }
  }
}
"""

PAYMENT_CUSTOMIZATION_CREATE = """
mutation PaymentCustomizationCreate($input: PaymentCustomizationInput!) {
  paymentCustomizationCreate(paymentCustomization: $input) {
    paymentCustomization {
      id
    }
    userErrors {
      message
    }
  }
}
"""

METAFIELDS_SET = """
mutation MetafieldsSet($metafields: [MetafieldsSetInput!]!) {
  metafieldsSet(metafields: $metafields) {
    metafields {
      id
    }
    userErrors {
      message
    }
  }
}
"""


class UnwrapError(RuntimeError):
    pass


@dataclass
class MutationResult:
    """Outcome of a mutation that reports failures in ``userErrors``."""

    payload: Optional[Dict[str, Any]] = None
    user_errors: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_response(
        cls, body: Dict[str, Any], mutation_field: str, payload_field: str
    ) -> "MutationResult":
        data = (body.get("data") or {}).get(mutation_field) or {}
        user_errors = data.get("userErrors") or []
        if user_errors:
            return cls(user_errors=list(user_errors))
        return cls(payload=data.get(payload_field))

    @property
    def ok(self) -> bool:
        return not self.user_errors

    def unwrap(self) -> Any:
        if not self.ok:
            raise UnwrapError(self.error_message())
        return self.payload

    def error_message(self) -> str:
        return " ".join(str(error.get("message")) for error in self.user_errors)


@dataclass(frozen=True)
class CustomizationKind:
    name: str
    request_name: str
    request_model: Type[BaseModel]
    create_mutation: str
    create_field: str
    record_field: str
    build_title: Callable[[Any], str]
    build_configuration: Callable[[Any], Dict[str, Any]]

    @property
    def metafield_namespace(self) -> str:
        return f"$app:{self.name}-customization"


@dataclass
class CustomizationOutcome:
    status_code: int
    error: Any = None
    customization_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


DELIVERY = CustomizationKind(
    name="delivery",
    request_name="createDeliveryCustomization",
    request_model=DeliveryCustomizationRequest,
    create_mutation=DELIVERY_CUSTOMIZATION_CREATE,
    create_field="deliveryCustomizationCreate",
    record_field="deliveryCustomization",
    build_title=lambda payload: f"Display message for postal code: {payload.zip}",
    build_configuration=lambda payload: {
        "zip": payload.zip,
        "message": payload.message,
    },
)

PAYMENT = CustomizationKind(
    name="payment",
    request_name="createPaymentCustomization",
    request_model=PaymentCustomizationRequest,
    create_mutation=PAYMENT_CUSTOMIZATION_CREATE,
    create_field="paymentCustomizationCreate",
    record_field="paymentCustomization",
    build_title=lambda payload: (
        f"Hide {payload.paymentMethod} if cart total is larger than {payload.cartTotal}"
    ),
    build_configuration=lambda payload: {
        "paymentMethodName": payload.paymentMethod,
        "cartTotal": payload.cartTotal,
    },
)

CUSTOMIZATION_KINDS: Dict[str, CustomizationKind] = {
    kind.request_name: kind for kind in (DELIVERY, PAYMENT)
}


def resolve_kind(request_name: Optional[str]) -> Optional[CustomizationKind]:
    if not request_name:
        return None
    return CUSTOMIZATION_KINDS.get(request_name)


def _metafield_input(
    kind: CustomizationKind, customization_id: str, configuration: Dict[str, Any]
) -> Dict[str, Any]:
    return {
        "ownerId": customization_id,
        "namespace": kind.metafield_namespace,
        "key": CONFIGURATION_KEY,
        "type": "json",
        "value": json.dumps(configuration),
    }


async def create_customization(
    kind: CustomizationKind,
    payload: BaseModel,
    client: GraphqlClient,
) -> CustomizationOutcome:
    try:
        create_response = await client.query(
            kind.create_mutation,
            {
                "input": {
                    "functionId": payload.functionId,
                    "title": kind.build_title(payload),
                    "enabled": True,
                }
            },
        )
        created = MutationResult.from_response(
            create_response, kind.create_field, kind.record_field
        )
        if not created.ok:
            logger.warning(
                "%s customization create rejected: %s",
                kind.name,
                created.error_message(),
            )
            return CustomizationOutcome(500, created.error_message())
        customization_id = created.unwrap()["id"]

        metafield_response = await client.query(
            METAFIELDS_SET,
            {
                "metafields": [
                    _metafield_input(
                        kind, customization_id, kind.build_configuration(payload)
                    )
                ]
            },
        )
        configured = MutationResult.from_response(
            metafield_response, "metafieldsSet", "metafields"
        )
        if not configured.ok:
            # The customization stays on the shop without a configuration.
            logger.warning(
                "%s customization %s configuration rejected: %s",
                kind.name,
                customization_id,
                configured.error_message(),
            )
            return CustomizationOutcome(
                500, configured.error_message(), customization_id
            )
    except GraphqlQueryError as exc:
        logger.warning("%s customization request failed: %s", kind.name, exc)
        return CustomizationOutcome(500, exc.response)

    logger.info("Created %s customization %s", kind.name, customization_id)
    return CustomizationOutcome(200, customization_id=customization_id)
