import os

from kindcfg.types import Cluster, Config, Context, NamedCluster, NamedContext, NamedUser
from kindcfg.write import write_config

EXPECTED = """apiVersion: v1
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


def test_write_non_existent_file(tmp_path):
    target = os.path.join(tmp_path, "bogus", "extra-bogus")
    write_config(_kind_config(), target)
    with open(target, encoding="utf-8") as handle:
        assert handle.read() == EXPECTED


def test_write_overwrites_existing_file(tmp_path):
    target = tmp_path / "config"
    target.write_text("a much longer piece of old content that should vanish\n" * 20)
    write_config(_kind_config(), str(target))
    assert target.read_text() == EXPECTED


def test_write_empty_config_gives_empty_file(tmp_path):
    target = tmp_path / "empty"
    write_config(Config(), str(target))
    assert target.read_text() == ""