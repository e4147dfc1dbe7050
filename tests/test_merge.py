import os

import pytest

from kindcfg.lock import lock_file, lock_name
from kindcfg.merge import merge, write_merged
from kindcfg.types import Cluster, Config, Context, NamedCluster, NamedContext, NamedUser


def _only(name: str, server: str = "") -> Config:
    return Config(
        clusters=[NamedCluster(name=name, cluster=Cluster(server=server))],
        users=[NamedUser(name=name)],
        contexts=[NamedContext(name=name)],
    )


def test_merge_bad_kind_config():
    with pytest.raises(ValueError):
        merge(Config(), Config())


def test_merge_empty_existing():
    existing = Config()
    merge(existing, _only("kind-kind"))
    assert existing == _only("kind-kind")


def test_merge_replace_existing():
    existing = _only("kind-kind", server="foo")
    merge(existing, _only("kind-kind"))
    assert existing == _only("kind-kind")


def test_merge_add_to_existing():
    existing = _only("kops-blah", server="foo")
    merge(existing, _only("kind-kind"))
    expected = Config(
        clusters=[
            NamedCluster(name="kops-blah", cluster=Cluster(server="foo")),
            NamedCluster(name="kind-kind"),
        ],
        users=[NamedUser(name="kops-blah"), NamedUser(name="kind-kind")],
        contexts=[NamedContext(name="kops-blah"), NamedContext(name="kind-kind")],
    )
    assert existing == expected


def test_merge_sets_current_context_and_keeps_other_fields():
    existing = _only("kops-blah")
    existing.other_fields = {"kind": "Config"}
    kind = _only("kind-kind")
    kind.current_context = "kind-kind"
    kind.other_fields = {"apiVersion": "v1"}
    merge(existing, kind)
    assert existing.current_context == "kind-kind"
    assert existing.other_fields == {"kind": "Config"}


def test_merge_copies_other_fields_when_missing():
    existing = Config()
    kind = _only("kind-kind")
    kind.other_fields = {"apiVersion": "v1", "kind": "Config"}
    merge(existing, kind)
    assert existing.other_fields == {"apiVersion": "v1", "kind": "Config"}


def _kind_config() -> Config:
    return Config(
        clusters=[
            NamedCluster(
                name="kind-kind",
                cluster=Cluster(
                    server="https://127.0.0.1:6443",
                    other_fields={"certificate-authority-data": "definitelyacert"},
                ),
            )
        ],
        contexts=[
            NamedContext(name="kind-kind", context=Context(user="kind-kind", cluster="kind-kind"))
        ],
        users=[
            NamedUser(
                name="kind-kind",
                user={"client-certificate-data": "seemslegit", "client-key-data": "yep"},
            )
        ],
        current_context="kind-kind",
        other_fields={"apiVersion": "v1", "kind": "Config", "preferences": {}},
    )


EXISTING = """clusters:
- cluster:
    certificate-authority-data: definitelyacert
    server: https://192.168.9.4:6443
  name: kind-foo
contexts:
- context:
    cluster: kind-foo
    user: kind-foo
  name: kind-foo
current-context: kind-foo
kind: Config
apiVersion: v1
preferences: {}
users:
- name: kind-foo
  user:
    client-certificate-data: seemslegit
    client-key-data: yep
"""

EXPECTED_NORMAL = """apiVersion: v1
clusters:
- cluster:
    certificate-authority-data: definitelyacert
    server: https://192.168.9.4:6443
  name: kind-foo
- cluster:
    certificate-authority-data: definitelyacert
    server: https://127.0.0.1:6443
  name: kind-kind
contexts:
- context:
    cluster: kind-foo
    user: kind-foo
  name: kind-foo
- context:
    cluster: kind-kind
    user: kind-kind
  name: kind-kind
current-context: kind-kind
kind: Config
preferences: {}
users:
- name: kind-foo
  user:
    client-certificate-data: seemslegit
    client-key-data: yep
- name: kind-kind
  user:
    client-certificate-data: seemslegit
    client-key-data: yep
"""

EXPECTED_NEW_FILE = """apiVersion: v1
clusters:
- cluster:
    certificate-authority-data: definitelyacert
    server: https://127.0.0.1:6443
  name: kind-kind
contexts:
- context:
    cluster: kind-kind
    user: kind-kind
  name: kind-kind
current-context: kind-kind
kind: Config
preferences: {}
users:
- name: kind-kind
  user:
    client-certificate-data: seemslegit
    client-key-data: yep
"""


def test_write_merged_normal(tmp_path):
    target = tmp_path / "existing-kubeconfig"
    target.write_text(EXISTING)
    write_merged(_kind_config(), str(target))
    assert target.read_text() == EXPECTED_NORMAL
    assert not os.path.exists(lock_name(str(target)))


def test_write_merged_bogus_config(tmp_path):
    target = str(tmp_path / "bogus")
    with pytest.raises(ValueError):
        write_merged(Config(), target)
    assert not os.path.exists(lock_name(target))


def test_write_merged_no_existing_file(tmp_path):
    target = os.path.join(tmp_path, "bogus", "extra-bogus")
    write_merged(_kind_config(), target)
    with open(target, encoding="utf-8") as handle:
        assert handle.read() == EXPECTED_NEW_FILE


def test_write_merged_fails_when_locked(tmp_path):
    target = str(tmp_path / "config")
    lock_file(target)
    with pytest.raises(FileExistsError):
        write_merged(_kind_config(), target)
    assert os.path.exists(lock_name(target))
    assert not os.path.exists(target)