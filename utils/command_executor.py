import subprocess
import os
import shlex
import pathlib
from utils.custom_logger import Logger
from typing import Dict, List, Optional, Union, Any

class CommandExecutor:
    def __init__(self) -> None:
        self.logger: Logger = Logger(name="CommandExecutor")

    def _run_subprocess(
        self,
        command: List[str],
        cwd: Optional[Union[str, pathlib.Path]] = None,
        check: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> subprocess.CompletedProcess:

        effective_env = os.environ.copy()
        if env:
            effective_env.update(env)

        cwd_path: Optional[pathlib.Path] = None
        if cwd:
            cwd_path = pathlib.Path(cwd).expanduser()
            if not cwd_path.is_dir():
                self.logger.error(f"Working directory does not exist: {cwd_path}")
                raise FileNotFoundError(f"Working directory not found: {cwd_path}")

        command_str_for_log = shlex.join(command)
        self.logger.info(f"Executing: '{command_str_for_log}' in '{cwd_path or pathlib.Path.cwd()}'")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace", # legacy-encoded commit messages
                cwd=str(cwd_path) if cwd_path else None,
                env=effective_env,
                check=False, # Check manually after logging
            )
        except FileNotFoundError:
            self.logger.error(f"Executable not found for command: {command_str_for_log}")
            raise

        if result.returncode != 0:
            stderr_output = result.stderr.strip() if result.stderr else "No stderr"
            stdout_output = result.stdout.strip() if result.stdout else "No stdout"
            self.logger.error(
                f"Command failed with exit code {result.returncode}: {command_str_for_log}\n"
                f"  Stderr: {stderr_output}\n"
                f"  Stdout: {stdout_output}"
            )
            if check:
                raise subprocess.CalledProcessError(
                    result.returncode, command,
                    output=result.stdout, stderr=result.stderr
                )
        else:
            stdout_preview = (result.stdout[:100] + '...') if result.stdout and len(result.stdout) > 100 else result.stdout
            self.logger.debug(f"Command successful: {command_str_for_log}. Output preview: {stdout_preview}")

        return result

    def execute(
        self,
        command_type: str,
        command_params: Dict[str, Any],
        check: bool = True
        ) -> subprocess.CompletedProcess:
        executor_method = getattr(self, f"execute_{command_type}", None)
        if not callable(executor_method):
            self.logger.error(f"Unknown command type: {command_type}")
            raise ValueError(f"Invalid command specification for type: {command_type}")
        return executor_method(command_params, check=check)

    def execute_git_command(self, params: Dict, check: bool = True) -> subprocess.CompletedProcess:
        command_parts: List[str] = ["git", params["command"]] + params.get("args", [])
        cwd: Optional[str] = params.get("cwd")
        return self._run_subprocess(command=command_parts, cwd=cwd, check=check, env=params.get("env"))

    def execute_mkdir_command(self, params: Dict, check: bool = True) -> subprocess.CompletedProcess:
        path: str = params["path"]
        target_path = pathlib.Path(path).expanduser()
        self.logger.info(f"Ensuring directory exists: {target_path}")
        target_path.mkdir(parents=True, exist_ok=True)
        return subprocess.CompletedProcess(args=['mkdir', '-p', str(target_path)], returncode=0)
