"""Parser for the resource monitor statements understood by the emulator."""

from dataclasses import dataclass, field

import snowflake.connector.errors
import sqlglot
from sqlglot.tokens import TokenType

from ..resource_monitors.types import TriggerAction, TriggerDefinition


def syntax_error(detail: str) -> snowflake.connector.errors.ProgrammingError:
    return snowflake.connector.errors.ProgrammingError(
        msg=f"SQL compilation error:\nsyntax error {detail}",
        errno=1003,
        sqlstate="42000",
    )


@dataclass(frozen=True)
class Word:
    text: str
    quoted: bool = False
    literal: bool = False

    @property
    def bare(self) -> bool:
        return not self.quoted and not self.literal


def split_words(sql: str) -> list[Word]:
    """
    Tokenize with the Snowflake dialect of sqlglot.

    Keywords sqlglot merges into one token (e.g. ``OR REPLACE``) are split back
    into single words and upper-cased; quoted identifiers and string literals
    keep their exact text.
    """
    try:
        tokens = sqlglot.tokenize(sql, read="snowflake")
    except sqlglot.errors.TokenError as e:
        raise syntax_error(str(e)) from None

    words: list[Word] = []
    for token in tokens:
        if token.token_type == TokenType.STRING:
            words.append(Word(token.text, literal=True))
        elif token.token_type == TokenType.IDENTIFIER:
            words.append(Word(token.text, quoted=True))
        elif token.token_type == TokenType.SEMICOLON:
            continue
        else:
            words.extend(Word(part.upper()) for part in token.text.split())
    return words


@dataclass(kw_only=True)
class MonitorParameters:
    credit_quota: str | None = None
    frequency: str | None = None
    start_timestamp: str | None = None
    end_timestamp: str | None = None
    notify_users: list[str] | None = None
    triggers: list[TriggerDefinition] | None = None


@dataclass(kw_only=True)
class CreateMonitor:
    name: str
    or_replace: bool = False
    parameters: MonitorParameters = field(default_factory=MonitorParameters)


@dataclass(kw_only=True)
class AlterMonitor:
    name: str
    if_exists: bool = False
    parameters: MonitorParameters = field(default_factory=MonitorParameters)


@dataclass(kw_only=True)
class DropMonitor:
    name: str


@dataclass(kw_only=True)
class ShowMonitors:
    pattern: str | None = None


Statement = CreateMonitor | AlterMonitor | DropMonitor | ShowMonitors


def parse_statement(sql: str) -> Statement:
    return StatementParser(sql).parse()


class StatementParser:
    def __init__(self, sql: str) -> None:
        self._words = split_words(sql)
        self._pos = 0

    def parse(self) -> Statement:
        if self._accept("CREATE"):
            statement = self._create()
        elif self._accept("ALTER"):
            statement = self._alter()
        elif self._accept("DROP"):
            statement = self._drop()
        elif self._accept("SHOW"):
            statement = self._show()
        elif self._at_end():
            raise syntax_error("empty statement")
        else:
            raise syntax_error(f"unexpected '{self._peek().text}'")

        if not self._at_end():
            raise syntax_error(f"unexpected '{self._peek().text}'")
        return statement

    def _create(self) -> CreateMonitor:
        or_replace = self._accept("OR", "REPLACE")
        self._expect("RESOURCE", "MONITOR")
        name = self._name()
        self._accept("WITH")
        return CreateMonitor(name=name, or_replace=or_replace, parameters=self._parameters())

    def _alter(self) -> AlterMonitor:
        self._expect("RESOURCE", "MONITOR")
        if_exists = self._accept("IF", "EXISTS")
        name = self._name()
        self._accept("SET")
        return AlterMonitor(name=name, if_exists=if_exists, parameters=self._parameters())

    def _drop(self) -> DropMonitor:
        self._expect("RESOURCE", "MONITOR")
        return DropMonitor(name=self._name())

    def _show(self) -> ShowMonitors:
        self._expect("RESOURCE", "MONITORS")
        if not self._accept("LIKE"):
            return ShowMonitors()
        word = self._next()
        if not word.literal:
            raise syntax_error(f"unexpected '{word.text}', expected a string pattern")
        return ShowMonitors(pattern=word.text)

    def _parameters(self) -> MonitorParameters:
        parameters = MonitorParameters()
        while not self._at_end():
            word = self._next()
            key = word.text if word.bare else None
            if key == "CREDIT_QUOTA":
                parameters.credit_quota = self._assigned_value()
            elif key == "FREQUENCY":
                parameters.frequency = self._assigned_value().upper()
            elif key == "START_TIMESTAMP":
                parameters.start_timestamp = self._assigned_value()
            elif key == "END_TIMESTAMP":
                parameters.end_timestamp = self._assigned_value()
            elif key == "NOTIFY_USERS":
                parameters.notify_users = self._user_list()
            elif key == "TRIGGERS":
                parameters.triggers = self._triggers()
            else:
                raise syntax_error(f"unexpected '{word.text}'")
        return parameters

    def _assigned_value(self) -> str:
        self._expect("=")
        return self._next().text

    def _user_list(self) -> list[str]:
        self._expect("=", "(")
        users = []
        if self._accept(")"):
            return users
        while True:
            users.append(self._next().text)
            if self._accept(")"):
                return users
            self._expect(",")

    def _triggers(self) -> list[TriggerDefinition]:
        triggers = []
        while self._accept("ON"):
            threshold = self._next().text
            self._expect("PERCENT", "DO")
            action = self._next().text
            try:
                triggers.append(
                    TriggerDefinition(threshold=int(threshold), trigger_action=TriggerAction(action))
                )
            except ValueError:
                raise syntax_error(f"invalid trigger 'ON {threshold} PERCENT DO {action}'") from None
        return triggers

    def _name(self) -> str:
        word = self._next()
        if word.literal:
            raise syntax_error(f"unexpected '{word.text}', expected an identifier")
        return word.text

    def _peek(self) -> Word | None:
        return self._words[self._pos] if self._pos < len(self._words) else None

    def _next(self) -> Word:
        word = self._peek()
        if word is None:
            raise syntax_error("unexpected end of statement")
        self._pos += 1
        return word

    def _at_end(self) -> bool:
        return self._pos >= len(self._words)

    def _accept(self, *texts: str) -> bool:
        candidates = self._words[self._pos : self._pos + len(texts)]
        if len(candidates) != len(texts):
            return False
        if not all(word.bare and word.text == text for word, text in zip(candidates, texts)):
            return False
        self._pos += len(texts)
        return True

    def _expect(self, *texts: str) -> None:
        if not self._accept(*texts):
            found = self._peek()
            raise syntax_error(
                f"unexpected '{found.text if found else 'end of statement'}', expected '{' '.join(texts)}'"
            )
