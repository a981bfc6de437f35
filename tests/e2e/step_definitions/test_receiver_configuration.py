"""Step definitions for receiver configuration scenarios."""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from smartagent_receiver import constants

# Variables the scenarios set themselves; never inherited from the caller
SCENARIO_ENV_VARS = (constants.CONFIG_ENV_VAR, "REDIS_HOST", "REDIS_PORT")


# Helper functions
def run_command(command_args, env_vars, cwd):
    """Run the checker and capture its result."""
    env = {k: v for k, v in os.environ.items() if k not in SCENARIO_ENV_VARS}
    env.update(env_vars)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(cwd), env.get("PYTHONPATH")]))

    try:
        result = subprocess.run(
            command_args,
            capture_output=True,
            text=True,
            timeout=30,
            cwd=cwd,
            env=env,
        )
    except subprocess.TimeoutExpired:
        pytest.fail("Command timed out")

    return {
        "returncode": result.returncode,
        "stdout": result.stdout,
        "stderr": result.stderr,
    }


def assert_log_contains(command_result, expected_text):
    """Assert that log output contains the expected text."""
    combined_output = command_result["stdout"] + command_result["stderr"]
    assert expected_text in combined_output, (
        f"Expected text '{expected_text}' not found in output. "
        f"stdout: {command_result['stdout']}, stderr: {command_result['stderr']}"
    )


# Load scenarios from the feature file
scenarios("../features/receiver_configuration.feature")


@pytest.fixture
def project_root():
    """Get the path to the project root."""
    return Path(__file__).parent.parent.parent.parent


@pytest.fixture
def fixtures_dir():
    """Get the path to the YAML configs shared with the unit tests."""
    return Path(__file__).parent.parent.parent / "testdata"


@pytest.fixture
def env_vars():
    """Store environment variables for the test."""
    return {}


@pytest.fixture
def command_result():
    """Store the result of running a command."""
    return {}


def checker_command(*args):
    return [sys.executable, "-m", "smartagent_receiver.main", *args]


# Given steps
@given(
    parsers.parse(
        'I set environment variable "{var_name}" to the testdata file "{config_file}"'
    )
)
def set_environment_variable_to_testdata(env_vars, fixtures_dir, var_name, config_file):
    """Point an environment variable at a testdata file."""
    env_vars[var_name] = str(fixtures_dir / config_file)


@given(parsers.parse('I set environment variable "{var_name}" to "{var_value}"'))
def set_environment_variable(env_vars, var_name, var_value):
    """Set an environment variable for the test."""
    env_vars[var_name] = var_value


# When steps
@when(parsers.re(r'I run main.py with config file "(?P<config_file>[^"]+)"$'))
def run_main_with_config_file(
    project_root, fixtures_dir, env_vars, command_result, config_file
):
    """Run the checker against a testdata config file."""
    command = checker_command("--config", str(fixtures_dir / config_file))
    command_result.update(run_command(command, env_vars, project_root))


@when(
    parsers.re(
        r'I run main.py with config file "(?P<config_file>[^"]+)" and args "(?P<args>[^"]*)"$'
    )
)
def run_main_with_config_and_args(
    project_root, fixtures_dir, env_vars, command_result, config_file, args
):
    """Run the checker against a testdata config file with extra arguments."""
    command = checker_command("--config", str(fixtures_dir / config_file), *args.split())
    command_result.update(run_command(command, env_vars, project_root))


@when(parsers.parse('I run main.py with args "{args}"'))
def run_main_with_args(project_root, env_vars, command_result, args):
    """Run the checker with only command line arguments."""
    command = checker_command(*args.split())
    command_result.update(run_command(command, env_vars, project_root))


# Then steps
@then(parsers.parse("the exit code must be {code:d}"))
def check_exit_code(command_result, code):
    """Check the exit code of the checker."""
    assert command_result["returncode"] == code, (
        f"Expected exit code {code}, got {command_result['returncode']}. "
        f"stdout: {command_result['stdout']}, stderr: {command_result['stderr']}"
    )


@then(parsers.parse('the log must contain: "{expected_text}"'))
def check_log_contains_text(command_result, expected_text):
    """Check that the log contains the expected text."""
    assert_log_contains(command_result, expected_text)


@then(parsers.parse('the output must contain: "{expected_text}"'))
def check_output_contains_text(command_result, expected_text):
    """Check that stdout contains the expected text."""
    assert expected_text in command_result["stdout"], (
        f"Expected text '{expected_text}' not found in stdout: {command_result['stdout']}"
    )


@then(
    parsers.parse(
        'the receiver "{receiver}" must have monitor field "{key}" with value "{expected_value}"'
    )
)
def check_monitor_field(command_result, receiver, key, expected_value):
    """Check a monitor field of a receiver in the printed configuration."""
    try:
        config_data = json.loads(command_result["stdout"])
    except json.JSONDecodeError as e:
        pytest.fail(
            f"Failed to parse JSON from output: {e}. stdout: {command_result['stdout']}"
        )

    monitor = config_data[receiver]["monitor"]
    actual_value = str(monitor.get(key, ""))
    assert actual_value == expected_value, (
        f"Expected {key}='{expected_value}', got {key}='{actual_value}'. "
        f"Full config: {monitor}"
    )
