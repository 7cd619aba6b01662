"""Subscription API namespace.

All routes delegate to ``SubscriptionService``. Controllers are kept thin
(parse → call service → respond).
"""

import logging

from flask import current_app, request
from flask_restx import Namespace, Resource, fields
from pydantic import ValidationError as PydanticValidationError

from subtracker.domain.exceptions import AppError
from subtracker.schemas.response import (
    app_error_response,
    error_response,
    invalid_input_response,
    success_response,
)
from subtracker.schemas.subscription_schema import (
    SubscriptionCreateSchema,
    SubscriptionTotalSchema,
    SubscriptionUpdateSchema,
)
from subtracker.services.subscription_service import SubscriptionService

ns = Namespace("subscriptions", description="User subscription records")

PARSE_ERROR_MESSAGE = "Cant parse data, please check provided data"

# ---------------------------------------------------------------------------
# Swagger models (for documentation only)
# ---------------------------------------------------------------------------
subscription_create_model = ns.model("SubscriptionCreate", {
    "service_name": fields.String(required=True, example="Yandex Plus"),
    "price": fields.Integer(required=True, example=400),
    "user_id": fields.String(required=True, example="60601fee-2bf1-4721-ae6f-7636e79a0cba"),
    "start_date": fields.String(required=True, description="MM-YYYY", example="01-2025"),
    "end_date": fields.String(description="MM-YYYY", example="12-2025"),
})

subscription_update_model = ns.model("SubscriptionUpdate", {
    "id": fields.String(required=True, example="123e4567-e89b-12d3-a456-426614174000"),
    "service_name": fields.String(example="Yandex Plus"),
    "price": fields.Integer(example=400),
    "user_id": fields.String(example="60601fee-2bf1-4721-ae6f-7636e79a0cba"),
    "start_date": fields.String(description="MM-YYYY", example="01-2025"),
    "end_date": fields.String(description="MM-YYYY; null clears it", example="12-2025"),
})


# ---------------------------------------------------------------------------
# Service instances
# ---------------------------------------------------------------------------
_subscription_svc = SubscriptionService(logger=logging.getLogger("subtracker.subscriptions"))


def _json_body():
    """Return the request JSON, or ``None`` if the body is not JSON."""
    return request.get_json(silent=True)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@ns.route("/subscription")
class SubscriptionWrite(Resource):
    """Create or partially update a subscription."""

    @ns.doc("create_subscription")
    @ns.expect(subscription_create_model)
    def post(self):
        """Create a new subscription."""
        payload = _json_body()
        if payload is None:
            return error_response(PARSE_ERROR_MESSAGE, "VALIDATION_ERROR", 400)
        try:
            data = SubscriptionCreateSchema.model_validate(payload)
            result = _subscription_svc.create_subscription(data)
            return success_response(result, 201)
        except PydanticValidationError as err:
            return invalid_input_response(err)
        except AppError as err:
            return app_error_response(err)

    @ns.doc("update_subscription")
    @ns.expect(subscription_update_model)
    def patch(self):
        """Update only the supplied fields of a subscription."""
        payload = _json_body()
        if payload is None:
            return error_response(PARSE_ERROR_MESSAGE, "VALIDATION_ERROR", 400)
        try:
            data = SubscriptionUpdateSchema.model_validate(payload)
            result = _subscription_svc.update_subscription(data)
            return success_response(result)
        except PydanticValidationError as err:
            return invalid_input_response(err)
        except AppError as err:
            return app_error_response(err)


@ns.route("/subscription/<string:subscription_id>")
@ns.param("subscription_id", "The subscription UUID")
class SubscriptionDetail(Resource):
    """Fetch or delete a single subscription."""

    @ns.doc("get_subscription")
    def get(self, subscription_id: str):
        """Fetch a subscription by id."""
        try:
            return success_response(_subscription_svc.get_subscription(subscription_id))
        except AppError as err:
            return app_error_response(err)

    @ns.doc("delete_subscription")
    def delete(self, subscription_id: str):
        """Delete a subscription by id."""
        try:
            _subscription_svc.delete_subscription(subscription_id)
            return success_response()
        except AppError as err:
            return app_error_response(err)


@ns.route("/subscriptions")
class SubscriptionList(Resource):
    """Paginated subscription listing."""

    @ns.doc("list_subscriptions", params={
        "offset": "Rows to skip (default 0)",
        "limit": "Page size (default 10)",
    })
    def get(self):
        """List subscriptions, newest first."""
        try:
            result = _subscription_svc.list_subscriptions(
                request.args.get("offset"),
                request.args.get("limit"),
                default_limit=current_app.config["DEFAULT_PAGE_LIMIT"],
                max_limit=current_app.config["MAX_PAGE_LIMIT"],
            )
            return success_response(result)
        except AppError as err:
            return app_error_response(err)


@ns.route("/subscriptions/total")
class SubscriptionTotal(Resource):
    """Aggregate subscription cost over a period."""

    @ns.doc("get_subscriptions_total", params={
        "start": "Period start, MM-YYYY (required)",
        "end": "Period end, MM-YYYY (required)",
        "user_id": "Only this user's subscriptions",
        "service_name": "Only this service",
    })
    def get(self):
        """Sum prices of subscriptions starting within the period."""
        try:
            data = SubscriptionTotalSchema.model_validate(request.args.to_dict())
            total = _subscription_svc.get_total_sum(data)
            return success_response({"total": total})
        except PydanticValidationError as err:
            return invalid_input_response(err)
        except AppError as err:
            return app_error_response(err)
