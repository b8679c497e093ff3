"""Security tests for loading untrusted chain definition files."""

import pytest
import yaml

from chaincfg.config import load, loads
from chaincfg.exceptions import MalformedConfigError
from chaincfg.yaml import Loader

# YAML tags that would execute code under an unsafe loader
YAML_CODE_EXECUTION = [
    "!!python/object/apply:os.system ['echo pwned']",
    "!!python/object/new:os.system ['id']",
    "!!python/object/apply:subprocess.check_output [['whoami']]",
    "!!python/object/new:subprocess.Popen [['malicious']]",
    '!!python/object/apply:eval [\'__import__("os").system("malicious")\']',
]

# Override values that a shell or template engine might try to evaluate
ENV_VAR_INJECTION = [
    "${__import__('os').system('malicious')}",
    "${eval('malicious')}",
    "$(malicious)",
    "`whoami`",
    "$((1+1))",
]

BILLION_LAUGHS_YAML = """
a: &a ["lol","lol","lol","lol","lol","lol","lol","lol","lol"]
b: &b [*a,*a,*a,*a,*a,*a,*a,*a,*a]
c: &c [*b,*b,*b,*b,*b,*b,*b,*b,*b]
d: &d [*c,*c,*c,*c,*c,*c,*c,*c,*c]
e: &e [*d,*d,*d,*d,*d,*d,*d,*d,*d]
f: &f [*e,*e,*e,*e,*e,*e,*e,*e,*e]
g: &g [*f,*f,*f,*f,*f,*f,*f,*f,*f]
"""


@pytest.mark.security
@pytest.mark.unit
@pytest.mark.parametrize("payload", YAML_CODE_EXECUTION)
def test_yaml_code_execution_blocked(payload: str):
    """Python object tags are refused by the safe loader."""
    with pytest.raises(yaml.constructor.ConstructorError, match="could not determine"):
        yaml.load(payload, Loader=Loader)


@pytest.mark.security
@pytest.mark.unit
@pytest.mark.parametrize("payload", YAML_CODE_EXECUTION)
def test_code_execution_in_definition_value(chain_yaml, write_config, payload: str):
    """A tagged value inside a definition aborts the load."""
    content = chain_yaml.replace("host: 127.0.0.1", f"host: {payload}")
    with pytest.raises(MalformedConfigError, match="Could not parse YAML"):
        load(write_config(content))


@pytest.mark.security
@pytest.mark.unit
@pytest.mark.parametrize("payload", ENV_VAR_INJECTION)
def test_env_override_values_are_literal(chain_file, monkeypatch, payload: str):
    """Override values are stored verbatim, never evaluated."""
    monkeypatch.setenv("CHAINCFG_NETWORKS__DEVELOPMENT__HOST", payload)
    assert load(chain_file).get_network("development").host == payload


@pytest.mark.security
@pytest.mark.unit
def test_reference_does_not_read_process_environment(chain_yaml, monkeypatch):
    """${NAME} resolves against the definition only, not os.environ."""
    monkeypatch.setenv("PATH", "/usr/bin")
    content = chain_yaml.replace("./migrations", "${PATH}/migrations")
    with pytest.raises(MalformedConfigError, match="Undefined reference"):
        loads(content)


@pytest.mark.security
@pytest.mark.unit
def test_billion_laughs_rejected(chain_yaml):
    """Alias bombs are rejected by the schema without being expanded."""
    with pytest.raises(MalformedConfigError, match="Extra inputs are not permitted"):
        loads(chain_yaml + BILLION_LAUGHS_YAML)


@pytest.mark.security
@pytest.mark.unit
def test_oversized_file_rejected(chain_yaml, write_config):
    """Files past the size limit are refused before parsing."""
    padding = "# " + "x" * 1024 + "\n"
    path = write_config(chain_yaml + padding * 1100)
    with pytest.raises(MalformedConfigError, match="exceeding maximum size"):
        load(path)
