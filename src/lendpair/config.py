import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, Literal, Self

import tomlkit
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from lendpair.cache import get_checksum_address
from lendpair.constants import FEE_PRECISION, LIQ_PRECISION, LTV_PRECISION, ZERO_ADDRESS
from lendpair.exceptions import InvalidLtv, InvalidPairConfig, InvalidRateConstants
from lendpair.logging import logger
from lendpair.rates import RateCurveConstants, VariableRateConstants, get_rate_calculator
from lendpair.validation.evm_values import ValidatedUint64

type Address = Annotated[str, AfterValidator(get_checksum_address)]


class Settings(BaseSettings):
    """
    Package-wide settings, read from `LENDPAIR_`-prefixed environment variables.
    """

    model_config = SettingsConfigDict(env_prefix="LENDPAIR_")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    max_oracle_delay: int = Field(default=86_400, ge=0)


class PairConfig(BaseModel):
    """
    Parameters fixed at pair creation.

    Fractions use their own precision: `max_ltv` at LTV_PRECISION, `liquidation_fee` at
    LIQ_PRECISION, `fee_to_protocol_rate` at FEE_PRECISION. A `maturity` of 0 means the pair never
    matures. Empty allow-lists leave the corresponding action open to every address.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_ltv: Annotated[int, Field(strict=True, ge=0, le=LTV_PRECISION)] = 75_000
    liquidation_fee: Annotated[int, Field(strict=True, ge=0, le=LIQ_PRECISION)] = 10_000
    fee_to_protocol_rate: Annotated[int, Field(strict=True, ge=0, le=FEE_PRECISION)] = 10_000
    maturity: ValidatedUint64 = 0
    penalty_rate: ValidatedUint64 = 0
    fee_recipient: Address = ZERO_ADDRESS
    approved_borrowers: frozenset[Address] = frozenset()
    approved_lenders: frozenset[Address] = frozenset()
    initial_rate_per_second: ValidatedUint64 | None = None
    rate: RateCurveConstants = Field(default_factory=VariableRateConstants)

    @field_validator("max_ltv", mode="after")
    @classmethod
    def validate_max_ltv(cls, max_ltv: int) -> int:
        if max_ltv == 0:
            raise InvalidLtv(ltv=max_ltv)
        return max_ltv

    @model_validator(mode="after")
    def validate_rates(self) -> Self:
        min_interest, max_interest = get_rate_calculator(self.rate).rate_bounds(self.rate)
        if self.maturity != 0 and not (min_interest <= self.penalty_rate <= max_interest):
            msg = (
                f"penalty_rate {self.penalty_rate} outside rate bounds "
                f"[{min_interest}, {max_interest}]"
            )
            raise ValueError(msg)
        if self.initial_rate_per_second is not None and not (
            min_interest <= self.initial_rate_per_second <= max_interest
        ):
            msg = (
                f"initial_rate_per_second {self.initial_rate_per_second} outside rate bounds "
                f"[{min_interest}, {max_interest}]"
            )
            raise ValueError(msg)
        return self


def parse_pair_config(data: Mapping[str, Any]) -> PairConfig:
    """
    Validate a mapping into a `PairConfig`, converting validation failures to package exceptions.
    """

    try:
        return PairConfig.model_validate(data)
    except ValidationError as exc:
        if all(error["loc"][:1] == ("rate",) for error in exc.errors()):
            raise InvalidRateConstants(message=str(exc)) from exc
        raise InvalidPairConfig(message=str(exc)) from exc


def load_pair_config(config_path: Path) -> PairConfig:
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as exc:
        raise InvalidPairConfig(message=f"Could not parse {config_path}: {exc}") from exc
    return parse_pair_config(data)


def dump_pair_config(config: PairConfig) -> dict[str, Any]:
    return config.model_dump(mode="json", exclude_none=True)


def save_pair_config(config: PairConfig, config_path: Path) -> None:
    config_path.write_text(
        tomlkit.dumps(
            dump_pair_config(config),
        ),
    )
    logger.info(f"Saved pair configuration to {config_path}.")


settings = Settings()
logger.setLevel(settings.log_level)
