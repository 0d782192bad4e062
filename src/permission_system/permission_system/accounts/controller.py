from __future__ import annotations

from flask import Flask, request

from ..common.pagination import parse_page, parse_size
from ..common.responses import web_response
from ..common.validators import require_json_object
from ..container import Container
from ..core.enums import Role, SortOrder
from ..core.security import current_account, roles_required
from .policy import account_list_scope

API_PREFIX = "/api/v1"


def register(app: Flask, container: Container) -> None:
    admin_required = roles_required(container.tokens, Role.ADMIN)
    verifier_required = roles_required(container.tokens, Role.VERIFIER)
    user_required = roles_required(container.tokens, Role.USER)
    accounts = container.account_service

    def _json_body() -> dict:
        return require_json_object(request.get_json(silent=True))

    def _list_for_caller():
        caller = current_account()
        scope = account_list_scope(caller.role, request.args.get("verified"))
        rows, paging = accounts.list_accounts(
            page=parse_page(request.args.get("page")),
            size=parse_size(request.args.get("size")),
            search=request.args.get("search", ""),
            order=SortOrder.parse(request.args.get("order")),
            allowed_roles=scope.roles,
            verified=scope.verified,
        )
        return web_response(
            "Success get all users",
            data=[a.to_dict(include_permissions=True) for a in rows],
            paging=paging,
        )

    def _detail(account_id: str):
        account = accounts.find_by_id(account_id)
        return web_response("User detail fetched successfully", data=account.to_dict())

    # -------- Public --------
    @app.route(f"{API_PREFIX}/register", methods=["POST"], endpoint="register")
    def register_account():
        body = _json_body()
        account = accounts.register(
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
        )
        return web_response("Register Successfully", data=account.to_dict(), status=201)

    @app.route(f"{API_PREFIX}/login", methods=["POST"], endpoint="login")
    def login():
        body = _json_body()
        token = container.auth_service.login(body.get("email"), body.get("password"))
        return web_response("Login Successfully", data={"token": token})

    # -------- Admin --------
    @app.route(f"{API_PREFIX}/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        return _list_for_caller()

    @app.route(f"{API_PREFIX}/admin/users/<account_id>", methods=["GET"], endpoint="admin_user_detail")
    @admin_required
    def admin_user_detail(account_id: str):
        return _detail(account_id)

    @app.route(f"{API_PREFIX}/admin/verificator", methods=["POST"], endpoint="register_verificator")
    @admin_required
    def register_verificator():
        body = _json_body()
        account = accounts.register_verificator(
            name=body.get("name"),
            email=body.get("email"),
            password=body.get("password"),
        )
        return web_response("Verificator registered successfully", data=account.to_dict(), status=201)

    @app.route(f"{API_PREFIX}/admin/users/<account_id>/verify", methods=["PATCH"], endpoint="promote_verificator")
    @admin_required
    def promote_verificator(account_id: str):
        accounts.promote_to_verificator(account_id)
        return web_response("Updated role successfully")

    @app.route(
        f"{API_PREFIX}/admin/users/<account_id>/reset-password",
        methods=["PATCH"],
        endpoint="reset_password",
    )
    @admin_required
    def reset_password(account_id: str):
        accounts.reset_password(account_id)
        return web_response("Password reset successfully")

    # -------- Verifier --------
    @app.route(f"{API_PREFIX}/verificator/users", methods=["GET"], endpoint="verifier_users")
    @verifier_required
    def verifier_users():
        return _list_for_caller()

    @app.route(f"{API_PREFIX}/verificator/users/<account_id>", methods=["GET"], endpoint="verifier_user_detail")
    @verifier_required
    def verifier_user_detail(account_id: str):
        return _detail(account_id)

    @app.route(f"{API_PREFIX}/verificator/users/<account_id>/verify", methods=["PATCH"], endpoint="toggle_verified")
    @verifier_required
    def toggle_verified(account_id: str):
        verified = accounts.toggle_verified(account_id)
        return web_response("User verify updated successfully", data={"verified": verified})

    # -------- User --------
    @app.route(f"{API_PREFIX}/user/password", methods=["PATCH"], endpoint="change_password")
    @user_required
    def change_password():
        body = _json_body()
        accounts.change_own_password(
            current_account().account_id,
            old_password=body.get("old_password"),
            new_password=body.get("new_password"),
        )
        return web_response("Password updated successfully")
