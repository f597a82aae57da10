# resources/item_resource.py
from flask.views import MethodView

from ..constants.service_code import ACTIONS, HTTP_STATUS_CODES, RESOURCES
from ..models.item_model import Item
from ..schemas.item_schema import ItemSchema, ItemUpdateSchema
from ..security.auth import token_required
from ..security.policy import authorize, require
from ..utils.blueprint import Blueprint
from ..utils.errors import ConflictError, NotFoundError
from ..utils.helpers import principal_log_tag, serialize_doc
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.rate_limits import crud_write_limiter


blp_item = Blueprint("Items", __name__, description="Inventory item operations")


def _load_item(item_id, log_tag):
    item = Item.get_by_id(item_id)
    if not item:
        Log.info(f"{log_tag} Item not found")
        raise NotFoundError("Item not found")
    return item


@blp_item.route("/items")
class ItemsResource(MethodView):

    @token_required
    @blp_item.response(HTTP_STATUS_CODES["OK"], ItemSchema(many=True))
    @blp_item.doc(
        summary="List active items",
        description="Admins see every branch; everyone else only their own branch.",
        security=[{"Bearer": []}],
    )
    def get(self, principal):
        log_tag = principal_log_tag("item_resource.py", "ItemsResource", "get", principal)

        require(authorize(principal, ACTIONS["LIST"], RESOURCES["ITEM"]))

        branch_filter = None if principal.is_admin else principal.branch_id
        items = Item.find_active(branch_id=branch_filter)
        Log.info(f"{log_tag} {len(items)} items")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Items retrieved successfully",
            data=[serialize_doc(i) for i in items],
        )

    @token_required
    @crud_write_limiter(entity_name="item")
    @blp_item.arguments(ItemSchema)
    @blp_item.response(HTTP_STATUS_CODES["CREATED"], ItemSchema)
    @blp_item.doc(
        summary="Create an item in the caller's branch",
        description="""
            Managers and sales create items in their own branch. Admins
            cannot create items.
        """,
        security=[{"Bearer": []}],
    )
    def post(self, item_data, principal):
        """Handle the POST request to create a new item."""
        log_tag = principal_log_tag("item_resource.py", "ItemsResource", "post", principal, name=item_data.get("name"))

        require(authorize(principal, ACTIONS["CREATE"], RESOURCES["ITEM"], proposed=item_data))

        branch_id = principal.branch_id

        Log.info(f"{log_tag} Checking if item already exists")
        if Item.name_exists(branch_id, item_data["name"]):
            Log.info(f"{log_tag} Item already exists")
            raise ConflictError("Item already exists")

        item_id = Item(
            name=item_data["name"],
            weight=item_data["weight"],
            category=item_data["category"],
            karat=item_data["karat"],
            factory_fees=item_data["factoryFees"],
            vendor=item_data["vendor"],
            branch_id=branch_id,
            quantity=item_data.get("Quantity"),
            photo=item_data.get("photo"),
        ).save()
        Log.info(f"{log_tag} Item created: {item_id}")

        return prepared_response(
            status=True,
            status_code="CREATED",
            message="Item created",
            data=serialize_doc(Item.get_by_id(item_id)),
        )


@blp_item.route("/items/<item_id>")
class ItemResource(MethodView):

    @token_required
    @blp_item.response(HTTP_STATUS_CODES["OK"], ItemSchema)
    @blp_item.doc(summary="Get an item", security=[{"Bearer": []}])
    def get(self, item_id, principal):
        log_tag = principal_log_tag("item_resource.py", "ItemResource", "get", principal, item_id=item_id)

        item = _load_item(item_id, log_tag)
        require(authorize(principal, ACTIONS["READ"], RESOURCES["ITEM"], target=item))

        return prepared_response(
            status=True,
            status_code="OK",
            message="Item retrieved successfully",
            data=serialize_doc(item),
        )

    @token_required
    @crud_write_limiter(entity_name="item")
    @blp_item.arguments(ItemUpdateSchema)
    @blp_item.response(HTTP_STATUS_CODES["OK"], ItemSchema)
    @blp_item.doc(summary="Update an item", security=[{"Bearer": []}])
    def put(self, item_data, item_id, principal):
        log_tag = principal_log_tag("item_resource.py", "ItemResource", "put", principal, item_id=item_id)

        item = _load_item(item_id, log_tag)
        require(authorize(principal, ACTIONS["UPDATE"], RESOURCES["ITEM"], target=item, proposed=item_data))

        new_name = item_data.get("name")
        if new_name and new_name != item.get("name") \
                and Item.name_exists(item.get("branchId"), new_name, exclude_id=item_id):
            Log.info(f"{log_tag} Another item already uses this name")
            raise ConflictError("Item already exists")

        Item.update(item_id, item_data)
        Log.info(f"{log_tag} Item updated: {sorted(item_data)}")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Item updated",
            data=serialize_doc(Item.get_by_id(item_id)),
        )

    @token_required
    @crud_write_limiter(entity_name="item")
    @blp_item.doc(summary="Soft-delete an item", security=[{"Bearer": []}])
    def delete(self, item_id, principal):
        log_tag = principal_log_tag("item_resource.py", "ItemResource", "delete", principal, item_id=item_id)

        item = _load_item(item_id, log_tag)
        require(authorize(principal, ACTIONS["DELETE"], RESOURCES["ITEM"], target=item))

        Item.soft_delete(item_id)

        return prepared_response(
            status=True,
            status_code="OK",
            message="Item deleted successfully",
            data={"id": item_id},
        )
