from __future__ import annotations

import pytest

from core.context.actor_context import PERMISSION_ADMIN, ActorContext
from core.envfile.editor import ConfigFileEditor
from core.settings_store.environment import DotenvEnvironment
from core.settings_store.errors import SettingsPermissionError
from core.settings_store.models import Setting
from core.settings_store.repository import DbSettingRepository
from core.settings_store.service import SettingsStore

pytestmark = pytest.mark.django_db(transaction=True)


def _db_store(tmp_path) -> SettingsStore:
    env_file = tmp_path / ".env"
    if not env_file.exists():
        env_file.write_text("MANDRILL_API_KEY=md-key\n", encoding="utf-8")
    return SettingsStore(
        repository=DbSettingRepository(),
        environment=DotenvEnvironment(env_file, fallback={}),
        editor=ConfigFileEditor(),
        resource_id=env_file,
    )


def test_repository_upsert_is_unique_by_name() -> None:
    repository = DbSettingRepository()
    repository.upsert("site_name", "Pixie")
    repository.upsert("site_name", "Pixie Gallery")

    assert Setting.objects.filter(name="site_name").count() == 1
    assert repository.all_values() == {"site_name": "Pixie Gallery"}


def test_store_reads_table_and_config_resource(tmp_path) -> None:
    Setting.objects.create(name="site_name", value="Pixie")
    store = _db_store(tmp_path)

    assert store.get("site_name") == "Pixie"
    assert store.get("mandrill_api_key") == "md-key"


def test_sensitive_write_creates_no_row(tmp_path) -> None:
    store = _db_store(tmp_path)
    store.set("mandrill_api_key", "md-rotated", None)

    assert not Setting.objects.filter(name="mandrill_api_key").exists()
    assert _db_store(tmp_path).get("mandrill_api_key") == "md-rotated"


def test_installed_flag_gates_table_writes(tmp_path) -> None:
    Setting.objects.create(name="installed", value="1")
    store = _db_store(tmp_path)

    with pytest.raises(SettingsPermissionError):
        store.set("site_name", "Nope", None)
    assert not Setting.objects.filter(name="site_name").exists()

    admin = ActorContext(actor_type="HUMAN", actor_id="a-1", permissions=(PERMISSION_ADMIN,))
    store.set("site_name", "Pixie", admin)
    assert Setting.objects.get(name="site_name").value == "Pixie"
