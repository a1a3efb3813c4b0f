"""
基于扫描器的 SQL 别名提取示例。

这里只是扫描器的一个使用者：它提供规则集并消费令牌流，
用 `peek` 做一个令牌的前瞻，不构建语法树。
"""
import re

from .errors import ScanError
from .rules import Rule, RuleSet
from .scanner import Scanner
from .transforms import constant, lowercase, skip, strip_quotes


class SelectListError(ScanError):
    """选择列表不符合 `select ... from` 的形式"""


def sql_rules():
    """返回 SQL 选择列表的规则集，关键字必须排在 TEXT 之前"""
    return RuleSet([
        Rule("KEYWORD", r"(select|from|as)\b", lowercase, flags=re.IGNORECASE),
        Rule("COMMA", r","),
        Rule("OP", r"[-=+*/]"),
        Rule("PAREN_OPEN", r"\(", constant(1)),
        Rule("PAREN_CLOSE", r"\)", constant(-1)),
        Rule("TEXT", r"\w+|'[^']*'|\"[^\"]*\"", strip_quotes),
        Rule("SPACE", r"\s*", skip),
    ])


def _is_keyword(token, word):
    return token.name == "KEYWORD" and token.value == word


def _ends_item(token):
    return token.name == "COMMA" or _is_keyword(token, "from")


def _render(parts):
    out = ""
    prev = None
    for token in parts:
        if token.name == "PAREN_OPEN":
            piece = "("
        elif token.name == "PAREN_CLOSE":
            piece = ")"
        else:
            piece = str(token.value)
        if prev is not None and not (
            prev.name == "PAREN_OPEN"
            or token.name in ("PAREN_CLOSE", "COMMA")
            or (token.name == "PAREN_OPEN" and prev.name == "TEXT")
        ):
            out += " "
        out += piece
        prev = token
    return out


def _select_item(scanner):
    parts = []
    depth = 0
    while True:
        token = scanner.peek()
        if token is None:
            raise SelectListError("unexpected end of input, expected FROM", scanner.position)
        if depth == 0 and _ends_item(token):
            break
        scanner.next()
        if token.name in ("PAREN_OPEN", "PAREN_CLOSE"):
            depth += token.value
            if depth < 0:
                raise SelectListError("unbalanced ')'", token.source_pos)
        if depth == 0 and _is_keyword(token, "as"):
            alias = scanner.next()
            if alias is None or alias.name != "TEXT":
                raise SelectListError("expected alias after AS", scanner.position)
            if not parts:
                raise SelectListError("missing expression before AS", token.source_pos)
            return parts, alias.value
        parts.append(token)

    if not parts:
        raise SelectListError("empty select item", token.source_pos)
    # 隐式别名：`expr alias`
    if len(parts) >= 2 and parts[-1].name == "TEXT" and parts[-2].name in ("TEXT", "PAREN_CLOSE"):
        return parts[:-1], parts[-1].value
    if len(parts) == 1 and parts[0].name == "TEXT":
        return parts, parts[0].value
    return parts, None


def extract_aliases(source, rules=None):
    """
    提取 `select ... from` 选择列表中每一项的表达式和别名。
    :param source: 任何 `Scanner` 接受的输入源。
    :param rules: 可选的规则集，默认为 `sql_rules()`。
    :return: `(expression, alias)` 列表；没有别名的表达式 alias 为 None。
    """
    scanner = Scanner(rules if rules is not None else sql_rules(), source)
    token = scanner.next()
    if token is None or not _is_keyword(token, "select"):
        raise SelectListError("expected SELECT", token.source_pos if token else scanner.position)

    result = []
    while True:
        parts, alias = _select_item(scanner)
        result.append((_render(parts), alias))
        sep = scanner.next()
        if sep is None:
            raise SelectListError("unexpected end of input, expected FROM", scanner.position)
        if sep.name == "COMMA":
            continue
        if _is_keyword(sep, "from"):
            return result
        raise SelectListError(f"unexpected {sep.value!r} after select item", sep.source_pos)
