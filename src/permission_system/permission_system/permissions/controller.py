from __future__ import annotations

from flask import Flask, request

from ..common.pagination import parse_page, parse_size
from ..common.responses import web_response
from ..common.validators import require_json_object
from ..container import Container
from ..core.enums import PermissionStatus, Role, SortOrder
from ..core.security import current_account, roles_required
from .policy import permission_list_status

API_PREFIX = "/api/v1"


def register(app: Flask, container: Container) -> None:
    admin_required = roles_required(container.tokens, Role.ADMIN)
    verifier_required = roles_required(container.tokens, Role.VERIFIER)
    user_required = roles_required(container.tokens, Role.USER)
    permissions = container.permission_service

    def _json_body() -> dict:
        return require_json_object(request.get_json(silent=True))

    def _list_for_caller():
        caller = current_account()
        status = permission_list_status(caller.role, request.args.get("status"))
        rows, paging = permissions.list_all(
            page=parse_page(request.args.get("page")),
            size=parse_size(request.args.get("size")),
            status=status,
            order=SortOrder.parse(request.args.get("order")),
        )
        return web_response(
            "Success retrieve permission requests",
            data=[p.to_dict() for p in rows],
            paging=paging,
        )

    def _detail(permission_id: str):
        perm = permissions.get_by_id(permission_id)
        return web_response("Permission detail fetched successfully", data=perm.to_dict())

    def _decide(permission_id: str, status: PermissionStatus):
        body = _json_body()
        permissions.change_status(
            actor_role=current_account().role,
            permission_id=permission_id,
            status=status,
            comment=body.get("comment"),
        )
        return web_response(f"Permission {status.value} successfully")

    # -------- Admin --------
    @app.route(f"{API_PREFIX}/admin/permissions", methods=["GET"], endpoint="admin_permissions")
    @admin_required
    def admin_permissions():
        return _list_for_caller()

    @app.route(f"{API_PREFIX}/admin/permissions/<permission_id>", methods=["GET"], endpoint="admin_permission_detail")
    @admin_required
    def admin_permission_detail(permission_id: str):
        return _detail(permission_id)

    # -------- Verifier --------
    @app.route(f"{API_PREFIX}/verificator/permissions", methods=["GET"], endpoint="verifier_permissions")
    @verifier_required
    def verifier_permissions():
        return _list_for_caller()

    @app.route(
        f"{API_PREFIX}/verificator/permissions/<permission_id>",
        methods=["GET"],
        endpoint="verifier_permission_detail",
    )
    @verifier_required
    def verifier_permission_detail(permission_id: str):
        return _detail(permission_id)

    @app.route(
        f"{API_PREFIX}/verificator/permissions/<permission_id>/approve",
        methods=["PATCH"],
        endpoint="approve_permission",
    )
    @verifier_required
    def approve_permission(permission_id: str):
        return _decide(permission_id, PermissionStatus.APPROVED)

    @app.route(
        f"{API_PREFIX}/verificator/permissions/<permission_id>/reject",
        methods=["PATCH"],
        endpoint="reject_permission",
    )
    @verifier_required
    def reject_permission(permission_id: str):
        return _decide(permission_id, PermissionStatus.REJECTED)

    @app.route(
        f"{API_PREFIX}/verificator/permissions/<permission_id>/revision",
        methods=["PATCH"],
        endpoint="revise_permission",
    )
    @verifier_required
    def revise_permission(permission_id: str):
        return _decide(permission_id, PermissionStatus.REVISED)

    # -------- User --------
    @app.route(f"{API_PREFIX}/user/permissions", methods=["POST"], endpoint="create_permission")
    @user_required
    def create_permission():
        body = _json_body()
        perm = permissions.create(
            current_account().account_id,
            title=body.get("title"),
            reason=body.get("reason"),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
        )
        return web_response("Permission created successfully", data=perm.to_dict(), status=201)

    @app.route(f"{API_PREFIX}/user/permissions", methods=["GET"], endpoint="my_permissions")
    @user_required
    def my_permissions():
        rows = permissions.list_mine(current_account().account_id)
        return web_response("User permissions retrieved", data=[p.to_dict() for p in rows])

    @app.route(f"{API_PREFIX}/user/permissions/<permission_id>", methods=["GET"], endpoint="my_permission_detail")
    @user_required
    def my_permission_detail(permission_id: str):
        perm = permissions.get_own(current_account().account_id, permission_id)
        return web_response("Permission detail fetched successfully", data=perm.to_dict())

    @app.route(f"{API_PREFIX}/user/permissions/<permission_id>", methods=["PUT"], endpoint="update_permission")
    @user_required
    def update_permission(permission_id: str):
        body = _json_body()
        permissions.update(
            current_account().account_id,
            permission_id,
            title=body.get("title"),
            reason=body.get("reason"),
            start_date=body.get("start_date"),
            end_date=body.get("end_date"),
        )
        return web_response("Permission updated successfully")

    @app.route(
        f"{API_PREFIX}/user/permissions/<permission_id>/cancel",
        methods=["PATCH"],
        endpoint="cancel_permission",
    )
    @user_required
    def cancel_permission(permission_id: str):
        permissions.cancel(current_account().account_id, permission_id)
        return web_response("Permission cancelled successfully")

    @app.route(f"{API_PREFIX}/user/permissions/<permission_id>", methods=["DELETE"], endpoint="delete_permission")
    @user_required
    def delete_permission(permission_id: str):
        permissions.delete(current_account().account_id, permission_id)
        return web_response("Permission deleted successfully")
