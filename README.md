# kindcfg

Helpers for managing the kubeconfig entries and node settings of local
Kubernetes clusters that run inside containers. Every kind cluster named
`<name>` is recorded in kubeconfig files under the key `kind-<name>`.

## Installation

```
pip install kindcfg
```

## Kubeconfig handling

Convert the raw admin kubeconfig produced by kubeadm into one whose
cluster, user and context entries (and current context) are all keyed
`kind-<name>`; a non-empty server argument replaces the cluster endpoint:

```python
from kindcfg.read import kind_from_raw_kubeadm
from kindcfg.encode import encode

with open("admin.conf", encoding="utf-8") as handle:
    raw_admin_conf = handle.read()

cfg = kind_from_raw_kubeadm(raw_admin_conf, "dev", "https://127.0.0.1:6443")
print(encode(cfg))
```

`encode` writes YAML with sorted keys and returns `""` for an empty
config. `read_config(path)` in `kindcfg.read` loads a kubeconfig file and
returns an empty `Config` when the file does not exist.

Merge a kind kubeconfig into the user's kubeconfig and make it the current
context. The target file is chosen as kubectl would: the explicit path if
given, otherwise the first existing file in `$KUBECONFIG` (or its last entry
if none exist), otherwise `$HOME/.kube/config`:

```python
from kindcfg.merge import write_merged

write_merged(cfg, "")   # "" means: discover the path as kubectl would
```

Entries with the same name are replaced, others are appended. `merge` in
`kindcfg.merge` does the same on two in-memory `Config` objects.

Remove a cluster again from every kubeconfig file in play (the explicit
path, or each file in `$KUBECONFIG`, or `$HOME/.kube/config`); a file is
rewritten only if something was removed from it:

```python
from kindcfg.remove import remove_kind

remove_kind("dev", "")
```

`remove(cfg, name)` performs the removal on a `Config` and returns whether
anything changed.

Files are locked with a `<path>.lock` file while they are modified.
`kindcfg.lock` offers `lock_file`, `unlock_file`, `lock_name` and the
context manager `locked(path)`; taking a lock that is already held raises
`FileExistsError`.

Other modules:

- `kindcfg.types` – the `Config`, `NamedCluster`, `Cluster`, `NamedUser`,
  `NamedContext` and `Context` data model (`Config.from_dict`,
  `Config.to_dict`; fields not modelled are kept in `other_fields`),
  `kind_cluster_key` and `check_kubeadm_expectations`, which raises
  `ValueError` unless a config has exactly one cluster, user and context.
- `kindcfg.paths` – kubeconfig path discovery (`paths`, `path_for_merge`,
  `home_dir`, `file_exists`, `discard_empty_and_duplicates`).
- `kindcfg.write` – `write_config`, which creates missing parent
  directories with mode 0755 and writes the file with mode 0600.

Malformed kubeconfig data raises `ValueError`.

## Node helpers

`kindcfg.common` provides:

- `make_node_namer(cluster_name)` – names nodes such as `kind-worker`,
  `kind-worker2`, `kind-worker3`, ...
- `port_or_get_free_port(port, listen_addr)` – `-1` gives `0`, `0` gives a
  free port, any other port is returned unchanged; and
  `get_free_port(listen_addr)`, which raises `OSError` if the address
  cannot be bound.
- `get_proxy_envs(cfg, get_env)` – collects `HTTP_PROXY`, `HTTPS_PROXY`
  and `NO_PROXY` (upper or lower case, returned under both spellings) and,
  when any is set, appends `cfg.networking.service_subnet` and
  `cfg.networking.pod_subnet` to `NO_PROXY`. `get_env` defaults to the
  process environment.
- `required_node_images(cfg)` – the set of `image` values of `cfg.nodes`.
- `file_on_host(path)` – creates a file, making its parent directories.
- `node_reached_cgroups_ready_regexp()` – the pattern of a node log line
  showing that cgroups are ready.
- `API_SERVER_INTERNAL_PORT` (6443).

## Load balancer configuration

```python
from kindcfg.loadbalancer import ConfigData, render_config

text = render_config(ConfigData(
    control_plane_port=6443,
    backend_servers={"dev-control-plane": "dev-control-plane:6443"},
    ipv6=False,
))
```

The result is an haproxy configuration with backend servers listed in
order of name. `IMAGE` and `CONFIG_PATH` name the load balancer image and
the configuration path inside it.

## Log archives

`kindcfg.untar.untar(stream, directory, logger=None)` extracts a tar
stream of regular files and directories into a directory, logs a warning
for entries of other types and drains the stream afterwards. A malformed
archive raises `ValueError`; a failed write raises `OSError`.

## What this package does not do

It does not create, start or delete clusters, does not talk to a container
runtime, and cannot fetch kubeconfigs or logs from running nodes; it works
on data and files handed to it. It has no command-line interface.

## Running the tests

```
pip install -e .[test]
pytest
```