"""Command line front end and composition root."""

import argparse
import asyncio
import sys
from collections.abc import Callable

import httpx

from rbacconsole import __version__
from rbacconsole.application.dto.dashboard_dto import PermissionsState
from rbacconsole.application.dto.profile_dto import ProfilePatch
from rbacconsole.application.ports import Notifier, RBACBackend
from rbacconsole.application.session_context import SessionContext
from rbacconsole.config import Settings, get_settings
from rbacconsole.domain.exceptions import RBACConsoleError
from rbacconsole.domain.value_objects import PermissionToken, permission_label
from rbacconsole.infrastructure.http.rest_backend import HttpRBACBackend
from rbacconsole.infrastructure.notification.notifiers import StreamNotifier
from rbacconsole.infrastructure.session.token_store import FileTokenStore, InMemoryTokenStore
from rbacconsole.interfaces.console import ActionResult, AdminConsole
from rbacconsole.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rbac-console", description="RBAC administration console")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("profile", help="Show your profile and permissions")
    sub.add_parser("stats", help="Show user and role totals (admins)")
    sub.add_parser("users", help="List users")
    sub.add_parser("roles", help="List roles")
    sub.add_parser("logout", help="Forget the stored session token")

    edit = sub.add_parser("edit-profile", help="Change name, email or password")
    edit.add_argument("--name")
    edit.add_argument("--email")
    edit.add_argument("--current-password", default="")
    edit.add_argument("--new-password", default="")
    edit.add_argument("--confirm-password", default="")

    assign = sub.add_parser("assign-role", help="Set a user's role")
    assign.add_argument("user_id")
    assign.add_argument("role_id")
    assign.add_argument("--yes", action="store_true", help="Confirm self-demotion without asking")

    create = sub.add_parser("create-role", help="Create a role")
    create.add_argument("name")
    create.add_argument("-p", "--permission", action="append", default=[], dest="permissions")

    update = sub.add_parser("update-role", help="Rename a role or replace its permissions")
    update.add_argument("role_id")
    update.add_argument("name")
    update.add_argument("-p", "--permission", action="append", default=[], dest="permissions")

    delete_role = sub.add_parser("delete-role", help="Delete a role")
    delete_role.add_argument("role_id")
    delete_role.add_argument("--yes", action="store_true", help="Delete without asking")

    delete_user = sub.add_parser("delete-user", help="Delete a user")
    delete_user.add_argument("user_id")
    delete_user.add_argument("--yes", action="store_true", help="Delete without asking")
    return parser


async def build_console(
    settings: Settings,
    backend: RBACBackend,
    notifier: Notifier,
) -> AdminConsole:
    """Composition root - restore the session and wire the console."""
    store = FileTokenStore(settings.token_file) if settings.token_file else InMemoryTokenStore()
    if settings.token:
        context = await SessionContext.from_token(settings.token, backend, store)
    else:
        context = await SessionContext.restore(backend, store)
    return AdminConsole(context, backend, notifier, login_path=settings.login_path)


def _exit_code(result: ActionResult) -> int:
    return 0 if result.ok else 1


async def _profile(console: AdminConsole, args, out) -> int:
    result = await console.load_dashboard()
    if not result.ok:
        return 1
    profile = result.value.profile
    print(f"Name:  {profile.name}", file=out)
    print(f"Email: {profile.email}", file=out)
    print(f"Role:  {profile.role_label}", file=out)
    if profile.permissions_state is PermissionsState.UNAVAILABLE:
        print("Permissions information not available", file=out)
    elif profile.permissions_state is PermissionsState.NONE:
        print("No permissions assigned", file=out)
    else:
        print("Permissions: " + ", ".join(profile.permission_labels), file=out)
    return 0


async def _stats(console: AdminConsole, args, out) -> int:
    result = await console.load_dashboard()
    if not result.ok:
        return 1
    stats = result.value.stats
    if stats is None:
        print("Statistics are only available to administrators", file=out)
        return 1
    print(f"Users: {stats.total_users}", file=out)
    print(f"Roles: {stats.total_roles}", file=out)
    return 0


async def _users(console: AdminConsole, args, out) -> int:
    result = await console.load_directory()
    if not result.ok:
        return 1
    for user in console.users.users:
        role = user.role.name if user.role else "-"
        print(f"{user.id}\t{user.name}\t{user.email}\t{role}", file=out)
    return 0


async def _roles(console: AdminConsole, args, out) -> int:
    result = await console.load_roles()
    if not result.ok:
        return 1
    for role in console.roles.roles:
        labels = ", ".join(permission_label(p) for p in sorted(role.permissions or ()))
        print(f"{role.id}\t{role.name}\t{labels}", file=out)
    return 0


async def _assign_role(console: AdminConsole, args, out) -> int:
    if console.context.can(PermissionToken.MANAGE_USERS):
        loaded = await console.load_directory()
    else:
        loaded = await console.load_roles(for_management=False)
    if not loaded.ok:
        return 1

    result = await console.propose_role_change(args.user_id, args.role_id)
    if result.needs_confirmation:
        print(result.message, file=out)
        if not (args.yes or _ask("Continue? [y/N] ")):
            console.cancel_role_change(result.decision)
            print("Cancelled", file=out)
            return 1
        result = await console.confirm_role_change(result.decision)
    if result.redirect_to:
        print("Your session has ended. Please sign in again.", file=out)
    return _exit_code(result)


def _ask(prompt: str) -> bool:
    try:
        return input(prompt).strip().lower() in ("y", "yes")
    except EOFError:
        return False


async def _create_role(console: AdminConsole, args, out) -> int:
    loaded = await console.load_roles()
    if not loaded.ok:
        return 1
    return _exit_code(await console.create_role(args.name, args.permissions))


async def _update_role(console: AdminConsole, args, out) -> int:
    loaded = await console.load_roles()
    if not loaded.ok:
        return 1
    return _exit_code(await console.update_role(args.role_id, args.name, args.permissions))


async def _delete_role(console: AdminConsole, args, out) -> int:
    if not (args.yes or _ask(f"Delete role {args.role_id}? [y/N] ")):
        print("Cancelled", file=out)
        return 1
    return _exit_code(await console.delete_role(args.role_id))


async def _delete_user(console: AdminConsole, args, out) -> int:
    if not (args.yes or _ask(f"Delete user {args.user_id}? [y/N] ")):
        print("Cancelled", file=out)
        return 1
    return _exit_code(await console.delete_user(args.user_id))


async def _edit_profile(console: AdminConsole, args, out) -> int:
    patch = ProfilePatch(
        name=args.name,
        email=args.email,
        current_password=args.current_password,
        new_password=args.new_password,
        confirm_password=args.confirm_password,
    )
    return _exit_code(await console.update_profile(patch))


async def _logout(console: AdminConsole, args, out) -> int:
    console.logout()
    print("Signed out", file=out)
    return 0


COMMANDS: dict[str, Callable] = {
    "profile": _profile,
    "stats": _stats,
    "users": _users,
    "roles": _roles,
    "edit-profile": _edit_profile,
    "assign-role": _assign_role,
    "create-role": _create_role,
    "update-role": _update_role,
    "delete-role": _delete_role,
    "delete-user": _delete_user,
    "logout": _logout,
}


async def run(
    args: argparse.Namespace,
    settings: Settings,
    out=None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Run one command against the configured backend."""
    out = out or sys.stdout
    notifier = StreamNotifier(out=out)
    async with HttpRBACBackend(
        settings.api_url, timeout=settings.request_timeout, transport=transport
    ) as backend:
        try:
            console = await build_console(settings, backend, notifier)
        except RBACConsoleError as e:
            notifier.error(e.user_message)
            return 1
        if args.command != "logout" and not console.context.is_authenticated:
            notifier.error("You are not signed in")
            return 1
        return await COMMANDS[args.command](console, args, out)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, settings.debug)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
