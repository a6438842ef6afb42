"""Process-wide ledger configuration.

``LedgerConfig`` is set once at startup and passed explicitly into the posting
generator and the formatter. Defaults match a Malaysian investor account
(Funding Societies Malaysia, ringgit, a PBe settlement account).

Environment overrides (all optional; the CLI loads a local ``.env`` first):

- ``STATEMENT_LEDGER_ASSET_ACCOUNT`` / ``_FUNDS_ACCOUNT`` / ``_BANK_ACCOUNT`` /
  ``_INCOME_ACCOUNT`` / ``_EXPENSE_ACCOUNT``
- ``STATEMENT_LEDGER_COMMODITY``, ``STATEMENT_LEDGER_INSTITUTION``
- ``STATEMENT_LEDGER_INDENT`` (``tab`` or a number of spaces)
- ``STATEMENT_LEDGER_LINE_WIDTH``
- ``STATEMENT_LEDGER_RULES_VERSION`` (``current`` or ``legacy``)
- ``STATEMENT_LEDGER_SHOW_BALANCE`` (``1``/``true``/``yes``)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from .models import AccountRole

_ENV_PREFIX = "STATEMENT_LEDGER_"

# ---------------------------------------------------------------------------
# Versioned comment -> account rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PostingRule:
    """Account role per polarity for one row comment.

    ``credit_role`` applies when only the credit side is non-zero (money back
    into the platform account, posted with a negative sign); ``debit_role``
    applies to the reverse case. ``None`` marks the polarity as unsupported.
    """

    credit_role: AccountRole | None
    debit_role: AccountRole | None


_CURRENT_RULES: dict[str, PostingRule] = {
    "Service Fee": PostingRule(credit_role=AccountRole.EXPENSE, debit_role=AccountRole.EXPENSE),
    "Interest": PostingRule(credit_role=AccountRole.INCOME, debit_role=AccountRole.INCOME),
    "Late Interest Fee": PostingRule(credit_role=AccountRole.INCOME, debit_role=AccountRole.INCOME),
    "Early Payment Fee": PostingRule(credit_role=AccountRole.INCOME, debit_role=AccountRole.INCOME),
    "Returns": PostingRule(credit_role=AccountRole.INCOME, debit_role=AccountRole.INCOME),
    "Late Returns Fee": PostingRule(credit_role=AccountRole.INCOME, debit_role=AccountRole.INCOME),
    "Principal": PostingRule(credit_role=AccountRole.FUNDS, debit_role=AccountRole.FUNDS),
}

# Older statements booked reversals of these fees against outstanding principal.
_LEGACY_RULES: dict[str, PostingRule] = {
    **_CURRENT_RULES,
    "Late Interest Fee": PostingRule(credit_role=AccountRole.INCOME, debit_role=AccountRole.FUNDS),
    "Early Payment Fee": PostingRule(credit_role=AccountRole.INCOME, debit_role=AccountRole.FUNDS),
}

RULE_SETS: Mapping[str, Mapping[str, PostingRule]] = {
    "current": _CURRENT_RULES,
    "legacy": _LEGACY_RULES,
}

DEFAULT_RULES_VERSION = "current"


# ---------------------------------------------------------------------------
# Configuration object
# ---------------------------------------------------------------------------


def _default_accounts() -> dict[AccountRole, str]:
    return {
        AccountRole.ASSET: "assets:fundingsocieties",
        AccountRole.FUNDS: "assets:funds:fundingsocieties",
        AccountRole.BANK: "assets:bank:pbe",
        AccountRole.INCOME: "income:interest",
        AccountRole.EXPENSE: "expenses:service",
    }


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Immutable output configuration shared by every pipeline stage."""

    accounts: Mapping[AccountRole, str] = field(default_factory=_default_accounts)
    commodity: str = "RM"
    institution: str = "Funding Societies"
    indent: str = "\t"
    line_width: int = 62
    rules_version: str = DEFAULT_RULES_VERSION
    show_balance: bool = False

    def __post_init__(self) -> None:
        missing = [role.value for role in AccountRole if not (self.accounts.get(role) or "").strip()]
        if missing:
            raise ValueError(f"LedgerConfig: missing account name(s) for {', '.join(missing)}")
        if not self.commodity.strip():
            raise ValueError("LedgerConfig.commodity must be non-empty")
        if isinstance(self.line_width, bool) or not isinstance(self.line_width, int):
            raise ValueError("LedgerConfig.line_width must be an integer")
        if self.line_width <= 0:
            raise ValueError("LedgerConfig.line_width must be positive")
        if not self.indent or self.indent.strip():
            raise ValueError("LedgerConfig.indent must be non-empty whitespace")
        if self.rules_version not in RULE_SETS:
            raise ValueError(
                f"unknown rules_version {self.rules_version!r}; "
                f"expected one of: {', '.join(sorted(RULE_SETS))}"
            )

    def account(self, role: AccountRole) -> str:
        return self.accounts[role]

    @property
    def rules(self) -> Mapping[str, PostingRule]:
        return RULE_SETS[self.rules_version]

    @property
    def indent_width(self) -> int:
        # A leading tab renders as 8 columns
        return len(self.indent.expandtabs(8))

    @classmethod
    def from_env(
        cls, env: Mapping[str, str] | None = None, **overrides: Any
    ) -> LedgerConfig:
        """Build a config from ``STATEMENT_LEDGER_*`` variables plus explicit overrides.

        ``overrides`` use field names (``commodity=...``, ``line_width=...``);
        ``None`` values are ignored so CLI options can be passed through as-is.
        """

        env = os.environ if env is None else env

        def _get(name: str) -> str | None:
            val = env.get(_ENV_PREFIX + name)
            if val is None or not val.strip():
                return None
            return val.strip()

        accounts = _default_accounts()
        for role in AccountRole:
            val = _get(f"{role.value.upper()}_ACCOUNT")
            if val:
                accounts[role] = val

        kwargs: dict[str, Any] = {"accounts": accounts}
        if (val := _get("COMMODITY")) is not None:
            kwargs["commodity"] = val
        if (val := _get("INSTITUTION")) is not None:
            kwargs["institution"] = val
        if (val := _get("INDENT")) is not None:
            kwargs["indent"] = _parse_indent(val)
        if (val := _get("LINE_WIDTH")) is not None:
            try:
                kwargs["line_width"] = int(val)
            except ValueError as exc:
                raise ValueError(f"STATEMENT_LEDGER_LINE_WIDTH must be an integer: {val!r}") from exc
        if (val := _get("RULES_VERSION")) is not None:
            kwargs["rules_version"] = val.lower()
        if (val := _get("SHOW_BALANCE")) is not None:
            kwargs["show_balance"] = _parse_bool(val)

        known = {f.name for f in fields(cls)}
        for name, value in overrides.items():
            if name not in known:
                raise TypeError(f"unknown LedgerConfig field: {name}")
            if value is not None:
                kwargs[name] = value

        return cls(**kwargs)

    def with_accounts(self, **names: str) -> LedgerConfig:
        """Return a copy with some account names replaced (keys are role values)."""

        accounts = dict(self.accounts)
        for key, name in names.items():
            accounts[AccountRole(key)] = name
        return replace(self, accounts=accounts)


def _parse_indent(raw: str) -> str:
    s = raw.strip().lower()
    if s in {"tab", "\\t"}:
        return "\t"
    if s.isdigit() and int(s) > 0:
        return " " * int(s)
    raise ValueError(f"STATEMENT_LEDGER_INDENT must be 'tab' or a positive integer: {raw!r}")


def _parse_bool(raw: str) -> bool:
    s = raw.strip().lower()
    if s in {"1", "true", "yes", "on"}:
        return True
    if s in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"invalid boolean value: {raw!r}")


__all__ = ["DEFAULT_RULES_VERSION", "RULE_SETS", "LedgerConfig", "PostingRule"]
