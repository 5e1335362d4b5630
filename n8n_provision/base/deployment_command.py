"""
Deployment Command Base Class

Base class for commands that need the operator's deployment answers.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from rich.prompt import Prompt

from n8n_provision import constants
from n8n_provision.core.pipeline import HostServices, Pipeline, ProvisionRun
from n8n_provision.exceptions import ValidationError
from n8n_provision.models.config import DeploymentConfig
from n8n_provision.services import ShellService
from n8n_provision.utils import load_answers
from .base_command import BaseCommand


class DeploymentCommand(BaseCommand):
    """
    Base class for commands acting on one n8n deployment.

    Answers come from command-line options first, then the dotenv answers
    file, then interactive prompts. Required values are validated before
    anything touches the host.
    """

    # option name -> (dotenv key, prompt, default, secret)
    QUESTIONS = {
        "domain": (
            constants.ENV_DOMAIN,
            "Enter your domain name (e.g., n8n.yourdomain.com)",
            None,
            False,
        ),
        "public_ip": (
            constants.ENV_PUBLIC_IP,
            "Enter your VPS IP address (e.g., 74.208.132.120)",
            None,
            False,
        ),
        "email": (
            constants.ENV_SSL_EMAIL,
            "Enter your email address (for SSL certificate notifications)",
            None,
            False,
        ),
        "username": (
            constants.ENV_ADMIN_USER,
            "Enter n8n admin username",
            constants.DEFAULT_ADMIN_USER,
            False,
        ),
        "password": (constants.ENV_ADMIN_PASSWORD, "Enter n8n admin password", None, True),
        "timezone": (
            constants.ENV_TIMEZONE,
            "Enter your timezone",
            constants.DEFAULT_TIMEZONE,
            False,
        ),
    }

    def __init__(
        self,
        answers: Optional[Dict[str, Optional[str]]] = None,
        env_file: Optional[Path] = None,
        keep_existing: bool = False,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.answers = {key: value for key, value in (answers or {}).items() if value}
        self.env_file = env_file
        self.keep_existing = keep_existing

    @property
    def can_prompt(self) -> bool:
        """Optional answers are only asked for on a terminal without --yes."""
        return not self.assume_yes and sys.stdin.isatty()

    def collect_config(self) -> DeploymentConfig:
        """
        Gather and validate the deployment configuration.

        Values with a default are used without asking when prompting is off.

        Raises:
            ValidationError: If a required value is empty
        """
        file_answers = load_answers(self.env_file)
        required = dict(DeploymentConfig.REQUIRED_FIELDS)
        values = {}
        for name, (env_key, question, default, secret) in self.QUESTIONS.items():
            value = self.answers.get(name) or file_answers.get(env_key)
            if not value and default is not None and not self.can_prompt:
                self.print_dim(f"{question}: {default} (default)")
                value = default
            if not value:
                extra = {"default": default} if default is not None else {}
                value = Prompt.ask(question, password=secret, console=self.console, **extra)
            values[name] = value or ""
            if name in required and not values[name]:
                raise ValidationError(constants.ERROR_EMPTY_FIELD.format(field=required[name]))

        return DeploymentConfig.create(**values)

    def show_summary(self, config: DeploymentConfig) -> None:
        self.print_info("Configuration Summary:")
        for key, value in config.summary().items():
            self.console.print(f"  {key}: {value}")
        self.console.print()

    def build_run(self, config: DeploymentConfig) -> ProvisionRun:
        shell = ShellService(self.logger)
        return ProvisionRun(
            config=config,
            settings=self.settings,
            services=HostServices.build(shell, self.settings, keep_existing=self.keep_existing),
            logger=self.logger,
            confirm=self.confirm,
        )

    def run_pipeline(self, pipeline: Pipeline, config: DeploymentConfig) -> ProvisionRun:
        run = self.build_run(config)
        pipeline.execute(run)
        return run
