"""
Validation Engine
Grupos de regras por campo (síncronas e assíncronas) com resultado estruturado

Estado por requisição: PENDING -> EVALUATING -> VALID | INVALID
"""
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union, runtime_checkable

from ddtrace import tracer

from domain.constants import HttpStatus, Messages, ValidationCodes
from shared.config.logger_config import get_logger
from shared.pipeline.cancellation import CancellationToken
from shared.pipeline.exceptions import ValidationException

logger = get_logger(child=True)

MessageTemplate = Union[str, Callable[[Any], str]]
AsyncRulePredicate = Callable[[Any, Any, CancellationToken], Awaitable[bool]]

# Maior severidade vence no status final do resultado
STATUS_SEVERITY = {
    HttpStatus.NOT_FOUND: 3,
    HttpStatus.CONFLICT: 2,
    HttpStatus.BAD_REQUEST: 1,
}


class ValidationState(Enum):
    PENDING = "pending"
    EVALUATING = "evaluating"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class ValidationError:
    """Erro de validação com escopo de campo"""
    field: str
    code: str
    message: str
    status_code: int = HttpStatus.BAD_REQUEST
    attempted_value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'field': self.field,
            'code': self.code,
            'message': self.message,
            'statusCode': self.status_code
        }


@dataclass
class ValidationResult:
    """Lista ordenada de erros + estado da validação"""
    errors: List[ValidationError] = field(default_factory=list)
    state: ValidationState = ValidationState.PENDING

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def first_error(self) -> Optional[ValidationError]:
        return self.errors[0] if self.errors else None

    @property
    def status_code(self) -> int:
        """200 quando válido; senão o status mais significativo (404 > 409 > 400)"""
        if not self.errors:
            return HttpStatus.OK
        most_severe = max(
            self.errors,
            key=lambda error: (STATUS_SEVERITY.get(error.status_code, 0), error.status_code)
        )
        return most_severe.status_code

    def add_error(self, error: ValidationError) -> None:
        self.errors.append(error)

    def complete(self) -> 'ValidationResult':
        self.state = ValidationState.VALID if self.is_valid else ValidationState.INVALID
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isValid': self.is_valid,
            'statusCode': self.status_code,
            'errors': [error.to_dict() for error in self.errors]
        }

    @classmethod
    def failure(cls, *errors: ValidationError) -> 'ValidationResult':
        return cls(errors=list(errors)).complete()


@dataclass
class Rule:
    check: Callable[..., Any]
    code: str
    message: MessageTemplate
    status_code: int = HttpStatus.BAD_REQUEST
    is_async: bool = False
    stop_on_failure: bool = False
    arguments: Dict[str, Any] = field(default_factory=dict)

    def render_message(self, field_name: str, value: Any) -> str:
        if callable(self.message):
            return self.message(value)
        return self.message.format(field=field_name, value=value, **self.arguments)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, uuid.UUID):
        return value.int == 0
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def _safe_compare(comparison: Callable[[Any], bool]) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        try:
            return bool(comparison(value))
        except TypeError:
            return False
    return check


class RuleGroup:
    """
    Regras de um campo, executadas na ordem de declaração

    Modificadores (with_message, with_code, with_status_code, stop_on_failure)
    se aplicam à última regra declarada; when() condiciona o grupo inteiro.
    """

    def __init__(self, field_name: str, value: Any):
        self.field = field_name
        self.value = value
        self.rules: List[Rule] = []
        self._condition: Optional[Callable[[Any], bool]] = None

    # ----- regras síncronas -----

    def not_null(self) -> 'RuleGroup':
        return self._add(lambda value: value is not None, ValidationCodes.REQUIRED, Messages.REQUIRED)

    def not_empty(self) -> 'RuleGroup':
        return self._add(lambda value: not _is_empty(value), ValidationCodes.REQUIRED, Messages.NOT_EMPTY)

    def greater_than(self, minimum: Any) -> 'RuleGroup':
        return self._add(
            _safe_compare(lambda value: value > minimum),
            ValidationCodes.OUT_OF_RANGE, Messages.GREATER_THAN, minimum=minimum
        )

    def greater_or_equals(self, minimum: Any) -> 'RuleGroup':
        return self._add(
            _safe_compare(lambda value: value >= minimum),
            ValidationCodes.OUT_OF_RANGE, Messages.GREATER_OR_EQUALS, minimum=minimum
        )

    def less_than(self, maximum: Any) -> 'RuleGroup':
        return self._add(
            _safe_compare(lambda value: value < maximum),
            ValidationCodes.OUT_OF_RANGE, Messages.LESS_THAN, maximum=maximum
        )

    def less_or_equals(self, maximum: Any) -> 'RuleGroup':
        return self._add(
            _safe_compare(lambda value: value <= maximum),
            ValidationCodes.OUT_OF_RANGE, Messages.LESS_OR_EQUALS, maximum=maximum
        )

    def between(self, minimum: Any, maximum: Any) -> 'RuleGroup':
        return self._add(
            _safe_compare(lambda value: minimum <= value <= maximum),
            ValidationCodes.OUT_OF_RANGE, Messages.BETWEEN, minimum=minimum, maximum=maximum
        )

    def is_valid_date(self) -> 'RuleGroup':
        return self._add(
            lambda value: isinstance(value, date) and not isinstance(value, datetime),
            ValidationCodes.INVALID_DATE, Messages.INVALID_DATE
        )

    def past(self, today: Optional[Callable[[], date]] = None) -> 'RuleGroup':
        today = today or date.today
        return self._add(
            _safe_compare(lambda value: value < today()),
            ValidationCodes.INVALID_DATE, Messages.PAST
        )

    def is_enum_name(self, enum_cls: type, allow_values: bool = False) -> 'RuleGroup':
        """Valor deve ser nome de um membro do enum (ou código, se allow_values)"""
        names = {member.name for member in enum_cls}
        values = {member.value for member in enum_cls}

        def check(value: Any) -> bool:
            if isinstance(value, enum_cls):
                return True
            if isinstance(value, str):
                raw = value.strip()
                digits = raw.removeprefix('-')
                if allow_values and digits.isascii() and digits.isdigit():
                    return int(raw) in values
                return raw.upper() in names
            if allow_values and isinstance(value, int) and not isinstance(value, bool):
                return value in values
            return False

        return self._add(
            check, ValidationCodes.INVALID_ENUM, Messages.INVALID_ENUM,
            options=', '.join(member.name.capitalize() for member in enum_cls)
        )

    def must(self, predicate: Callable[[Any], bool]) -> 'RuleGroup':
        return self._add(predicate, ValidationCodes.INVALID_VALUE, Messages.INVALID_VALUE)

    # ----- regra assíncrona -----

    def respect(self, predicate: AsyncRulePredicate) -> 'RuleGroup':
        """
        Regra assíncrona: predicate(value, repository, cancellation) -> bool

        Recebe o repositório e o token explicitamente (sem service locator).
        """
        self.rules.append(Rule(
            check=predicate,
            code=ValidationCodes.INVALID_VALUE,
            message=Messages.INVALID_VALUE,
            is_async=True
        ))
        return self

    # ----- modificadores -----

    def with_message(self, message: MessageTemplate) -> 'RuleGroup':
        self._last_rule().message = message
        return self

    def with_code(self, code: str) -> 'RuleGroup':
        self._last_rule().code = code
        return self

    def with_status_code(self, status_code: int) -> 'RuleGroup':
        self._last_rule().status_code = int(status_code)
        return self

    def stop_on_failure(self) -> 'RuleGroup':
        """Se a última regra falhar, as regras seguintes deste campo são puladas"""
        self._last_rule().stop_on_failure = True
        return self

    def when(self, condition: Union[bool, Callable[[Any], bool]]) -> 'RuleGroup':
        self._condition = condition if callable(condition) else (lambda _value: condition)
        return self

    # ----- execução -----

    async def evaluate(
        self,
        result: ValidationResult,
        repository: Any,
        cancellation: CancellationToken
    ) -> None:
        if self._condition is not None and not self._condition(self.value):
            return

        for rule in self.rules:
            cancellation.raise_if_cancelled()

            if rule.is_async:
                passed = await cancellation.guard(rule.check(self.value, repository, cancellation))
            else:
                passed = rule.check(self.value)

            if passed:
                continue

            result.add_error(ValidationError(
                field=self.field,
                code=rule.code,
                message=rule.render_message(self.field, self.value),
                status_code=rule.status_code,
                attempted_value=self.value
            ))

            if rule.stop_on_failure:
                break

    def _add(self, check: Callable[[Any], bool], code: str, message: str, **arguments) -> 'RuleGroup':
        self.rules.append(Rule(check=check, code=code, message=message, arguments=arguments))
        return self

    def _last_rule(self) -> Rule:
        if not self.rules:
            raise ValueError(f"No rule declared for field '{self.field}' yet")
        return self.rules[-1]


class ValidationBuilder:
    """Coleta os grupos de regras declarados por uma requisição"""

    def __init__(self):
        self.groups: List[RuleGroup] = []

    def rule_for(self, field_name: str, value: Any) -> RuleGroup:
        group = RuleGroup(field_name, value)
        self.groups.append(group)
        return group


@runtime_checkable
class Validatable(Protocol):
    """Requisições que declaram suas próprias regras"""

    def define_rules(self, builder: ValidationBuilder) -> None:
        ...


class Validator:
    """
    Executa as regras de uma requisição

    Falhas acumulam entre campos; stop_on_failure só interrompe o campo atual.
    """

    @tracer.wrap(resource="pipeline.validate")
    async def validate(
        self,
        request: Any,
        repository: Any = None,
        cancellation: Optional[CancellationToken] = None
    ) -> ValidationResult:
        cancellation = cancellation or CancellationToken.none()
        result = ValidationResult()

        builder = ValidationBuilder()
        if isinstance(request, Validatable):
            request.define_rules(builder)

        result.state = ValidationState.EVALUATING
        for group in builder.groups:
            await group.evaluate(result, repository, cancellation)

        result.complete()

        logger.debug(
            "Request validated",
            request_type=type(request).__name__,
            state=result.state.value,
            errors=len(result.errors)
        )

        return result

    async def validate_or_raise(
        self,
        request: Any,
        repository: Any = None,
        cancellation: Optional[CancellationToken] = None
    ) -> ValidationResult:
        result = await self.validate(request, repository, cancellation)
        if not result.is_valid:
            raise ValidationException(result)
        return result
