"""Module which initializes Dynaconf"""

from dynaconf import Dynaconf, Validator


# pylint: disable=too-few-public-methods
class DefaultValueValidator(Validator):
    """Validator which will run default function only when the original value is missing"""

    def __init__(self, name, default, **kwargs) -> None:
        super().__init__(
            name,
            ne=None,
            messages={
                "operations": (
                    "{name} must {operation} {op_value} but it is {value} in env {env}. "
                    "Please check your settings.yaml or RBACSUITE_ environment variables."
                )
            },
            default=default,
            when=Validator(name, must_exist=False) | Validator(name, eq=None),
            **kwargs
        )


settings = Dynaconf(
    environments=True,
    lowercase_read=True,
    load_dotenv=True,
    settings_files=["config/settings.yaml", "config/secrets.yaml"],
    envvar_prefix="RBACSUITE",
    merge_enabled=True,
    validators=[
        DefaultValueValidator("harness.polling_timeout", default=30, cast=float, gt=0),
        DefaultValueValidator("harness.dry_run", default=True, is_type_of=bool),
        DefaultValueValidator("harness.identity_domain", default="customdomain", is_type_of=str),
        DefaultValueValidator("harness.elevated_group", default="osd-sre-admins", is_type_of=str),
    ],
    validate_only=["harness"],
    loaders=["dynaconf.loaders.env_loader", "rbacsuite.config.openshift_loader"],
)
