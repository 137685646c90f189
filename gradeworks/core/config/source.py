"""pydantic-settings sources that read our config directory.

A config root holds one ``<field>.yaml`` per top-level settings field. Each
deployment environment other than ``local`` may layer ``env.d/<env>/<field>.yaml``
on top of it, and ``secrets.vault.yaml`` is an ansible-vault encrypted file in
the most specific of those directories.
"""

import functools
import getpass
import typing as t
from pathlib import Path

import pydantic as p
import yaml
from ansible.parsing.vault import VaultLib, VaultSecret
from keyctl import Key as keyctl
from keyctl import KeyNotExistError
from pydantic_settings import PydanticBaseSettingsSource
from pydantic_settings.sources import SettingsError

from gradeworks.model import DeploymentEnvironment

# fields supplied by the caller, never looked up in a source
BootFields = frozenset({"root", "env", "override"})
VaultFileName = "secrets.vault.yaml"


class SourceState(t.TypedDict, total=False):
    root: t.Required[p.AnyUrl]
    env: t.Required[DeploymentEnvironment]
    override: tuple[str, ...]


def load_paths(root: p.AnyUrl, env: DeploymentEnvironment) -> list[Path]:
    """Config directories in precedence order, lowest first."""
    if root.scheme != "file" or not root.path:
        raise ValueError(f"{root} is not a local directory")
    base = Path(root.path)
    if env is DeploymentEnvironment.Local:
        return [base]
    return [base, base / "env.d" / env.value]


class FieldSource(PydanticBaseSettingsSource):
    """Builds the source's contribution one top-level field at a time.

    Subclasses implement ``lookup()``, raising KeyError when they have
    nothing for a field.
    """

    @property
    def state(self) -> SourceState:
        return t.cast(SourceState, self.current_state)

    def lookup(self, field_name: str) -> t.Any:
        raise NotImplementedError

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        value = self.lookup(field_name)
        return value, field_name, isinstance(value, dict)

    def __call__(self) -> dict[str, t.Any]:
        found: dict[str, t.Any] = {}
        for name in self.settings_cls.model_fields:
            if name in BootFields:
                continue
            try:
                found[name] = self.lookup(name)
            except KeyError:
                continue
            except (ValueError, yaml.YAMLError) as e:
                raise SettingsError(f"{type(self).__name__}: cannot read a value for {name!r}: {e}") from e
        return found


class OverrideSettingsSource(FieldSource):
    """Turns ``-o vendor.pinata.timeout=5`` style overrides into partial field
    trees; values are parsed as YAML scalars.

    Must come before the YAML source: pydantic-settings lets earlier sources
    win when it deep-merges their values.
    """

    @functools.cached_property
    def tree(self) -> dict[str, t.Any]:
        tree: dict[str, t.Any] = {}
        for option in self.state.get("override", ()):
            key, sep, value = option.partition("=")
            if not sep or not key.strip():
                raise ValueError(f"override {option!r} is not of the form key.path=value")
            *parents, leaf = key.strip().split(".")
            node = tree
            for part in parents:
                node = node.setdefault(part, {})
            node[leaf] = yaml.safe_load(value.strip())
        return tree

    def lookup(self, field_name: str) -> t.Any:
        return self.tree[field_name]


class YAMLCascadingSettingsSource(FieldSource):
    """Reads ``<field>.yaml`` from each config directory, merging later
    directories over earlier ones."""

    @functools.cached_property
    def directories(self) -> list[Path]:
        return load_paths(self.state["root"], self.state["env"])

    def lookup(self, field_name: str) -> t.Any:
        documents = [
            yaml.safe_load(fn.read_text(encoding="utf8"))
            for fn in (d / f"{field_name}.yaml" for d in self.directories)
            if fn.exists()
        ]
        if not documents:
            raise KeyError(field_name)
        return functools.reduce(_merge, documents)


class AnsibleVaultSecretsSource(FieldSource):
    """Decrypts the vault file with a key cached in the kernel keyring, asking
    for it on the terminal on first use. Nothing is asked when the file does
    not exist."""

    @functools.cached_property
    def secrets(self) -> dict[str, t.Any]:
        env = self.state["env"]
        vp = load_paths(self.state["root"], env)[-1] / VaultFileName
        if not vp.exists():
            return {}

        key_name = f"{env.value}:{VaultFileName}"
        try:
            key, prompted = keyctl.search(key_name).data, False
        except KeyNotExistError:
            key, prompted = getpass.getpass(f"provide vault key ({key_name}) "), True

        vault = VaultLib(secrets=[(None, VaultSecret(key.encode()))])
        content = vault.decrypt(vp.read_bytes())
        # only a key that opened the vault is remembered
        if prompted:
            keyctl.add(key_name, key)
        return yaml.safe_load(content) or {}

    def lookup(self, field_name: str) -> t.Any:
        return self.secrets[field_name]


def _merge(base: t.Any, layer: t.Any) -> t.Any:
    if not (isinstance(base, dict) and isinstance(layer, dict)):
        return layer
    merged = dict(t.cast(dict[str, t.Any], base))
    for k, v in t.cast(dict[str, t.Any], layer).items():
        merged[k] = _merge(merged[k], v) if k in merged else v
    return merged
