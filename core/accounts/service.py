"""
Pixie Accounts - Account and Root Folder Repositories
=====================================================
Django ORM implementations of the account/container contracts used by
the installer, plus session helpers for the HTTP adapter.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Optional

from django.contrib.auth.hashers import check_password, make_password
from django.db import IntegrityError, transaction
from django.utils.crypto import get_random_string

from core.accounts.models import SHARE_ID_LENGTH, Account, Folder
from core.bootstrap.contracts import AdminAccount, RootContainer
from core.context.actor_context import ActorContext

SESSION_ACCOUNT_KEY = "pixie_account_id"
ROOT_FOLDER_NAME = "root"
ROOT_FOLDER_DESCRIPTION = "Root album for your photos and folders."

_SHARE_ID_ATTEMPTS = 5


def _clean_email(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("email must be a non-empty string.")
    cleaned = value.strip().lower()
    if not cleaned or "@" not in cleaned:
        raise ValueError("email must be a valid address.")
    return cleaned


def _clean_password(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError("password must be a non-empty string.")
    return value


def _to_admin_account(account: Account) -> AdminAccount:
    return AdminAccount(
        account_id=str(account.id),
        email=account.email,
        permissions=tuple(sorted(set(account.permissions or ()))),
    )


class DjangoAccountRepository:
    def create_account(
        self,
        *,
        email: str,
        password: str,
        permissions: tuple[str, ...],
    ) -> AdminAccount:
        try:
            account = Account.objects.create(
                email=_clean_email(email),
                password_hash=make_password(_clean_password(password)),
                permissions=sorted(set(permissions)),
            )
        except IntegrityError as exc:
            raise ValueError("An account with this email already exists.") from exc
        return _to_admin_account(account)

    def authenticate(self, email: str, password: str) -> Optional[AdminAccount]:
        try:
            account = Account.objects.get(email=_clean_email(email))
        except (Account.DoesNotExist, ValueError):
            return None
        if not check_password(password, account.password_hash):
            return None
        return _to_admin_account(account)

    def login(self, account: AdminAccount, session: MutableMapping[str, Any]) -> None:
        session[SESSION_ACCOUNT_KEY] = account.account_id

    def account_for_session(
        self,
        session: MutableMapping[str, Any],
    ) -> Optional[AdminAccount]:
        account_id = session.get(SESSION_ACCOUNT_KEY)
        if not account_id:
            return None
        account = Account.objects.filter(id=account_id).first()
        if account is None:
            return None
        return _to_admin_account(account)

    def actor_for_session(
        self,
        session: MutableMapping[str, Any],
    ) -> Optional[ActorContext]:
        account = self.account_for_session(session)
        return None if account is None else account.to_actor()


class DjangoContainerRepository:
    def create_root_container(
        self,
        *,
        owner_id: str,
        description: str = ROOT_FOLDER_DESCRIPTION,
    ) -> RootContainer:
        owner = Account.objects.get(id=owner_id)
        attempts = 0
        while True:
            try:
                with transaction.atomic():
                    folder = Folder.objects.create(
                        name=ROOT_FOLDER_NAME,
                        share_id=get_random_string(SHARE_ID_LENGTH),
                        owner=owner,
                        description=description,
                    )
                break
            except IntegrityError:
                # share_id collision
                attempts += 1
                if attempts >= _SHARE_ID_ATTEMPTS:
                    raise

        return RootContainer(
            container_id=str(folder.id),
            name=folder.name,
            share_token=folder.share_id,
            owner_id=str(owner.id),
            description=folder.description,
        )
