from unittest.mock import call, patch

from deploy_functions import build_deploy_command, main
from function_settings import FunctionBinding, load_bindings

BINDINGS = load_bindings({})


def test_http_function_command():
    command = build_deploy_command(BINDINGS["function_introduction"], "europe-west2", "python312")

    assert command[:4] == ["gcloud", "functions", "deploy", "function-introduction"]
    assert "--entry-point=function_introduction" in command
    assert "--region=europe-west2" in command
    assert "--runtime=python312" in command
    assert "--trigger-http" in command
    assert "--allow-unauthenticated" in command
    assert "--max-instances=100" in command
    assert not any(arg.startswith("--project") for arg in command)


def test_authenticated_http_function_command():
    binding = FunctionBinding(name="hello", entry_point="function_introduction", methods=("GET",),
                              auth_level="authenticated")

    command = build_deploy_command(binding, "us-central1", "python312", project="my-project")

    assert "--no-allow-unauthenticated" in command
    assert "--allow-unauthenticated" not in command
    assert "--project=my-project" in command


def test_storage_function_command():
    with patch("deploy_functions.STORAGE_PROJECT", None):
        command = build_deploy_command(BINDINGS["blob_copy"], "us-central1", "python312")

    assert "--entry-point=blob_copy_function" in command
    assert "--trigger-event-filters=type=google.cloud.storage.object.v1.finalized" in command
    assert "--trigger-event-filters=bucket=source-container" in command
    assert "--retry" in command
    assert "--trigger-http" not in command
    assert "--set-env-vars=SOURCE_BUCKET=source-container,DESTINATION_BUCKET=destination-container" in command


def test_storage_function_command_with_project_and_no_retry():
    binding = load_bindings({"BLOB_COPY_RETRY": "false", "BLOB_COPY_MAX_INSTANCES": "3"})["blob_copy"]

    with patch("deploy_functions.STORAGE_PROJECT", "data-project"):
        command = build_deploy_command(binding, "us-central1", "python312")

    assert "--retry" not in command
    assert "--max-instances=3" in command
    assert command[-1].endswith(",STORAGE_PROJECT=data-project")


def test_dry_run_prints_commands(capsys):
    with patch("deploy_functions.BINDINGS", BINDINGS), patch("deploy_functions.subprocess.run") as mock_run:
        rc = main(["--dry-run", "--region", "asia-east1"])

    assert rc == 0
    mock_run.assert_not_called()
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2
    assert all(line.startswith("gcloud functions deploy") for line in lines)
    assert all("--region=asia-east1" in line for line in lines)


def test_deploy_runs_gcloud():
    with patch("deploy_functions.BINDINGS", BINDINGS), patch("deploy_functions.subprocess.run") as mock_run:
        rc = main(["--only", "function_introduction"])

    assert rc == 0
    mock_run.assert_called_once()
    assert mock_run.call_args == call(mock_run.call_args.args[0], check=True)
    assert mock_run.call_args.args[0][3] == "function-introduction"
