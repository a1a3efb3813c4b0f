import re
import warnings

from .errors import RuleSetWarning
from .transforms import skip


class Match:
    """封装匹配索引"""

    __slots__ = ["start", "end"]

    def __init__(self, start, end):
        self.start = start
        self.end = end

    def __repr__(self):
        return f"Match({self.start}, {self.end})"


class RegexMatcher:
    """使用 Python `re` 的正则匹配器"""

    def __init__(self, pattern, flags=0):
        if isinstance(pattern, re.Pattern):
            if flags:
                raise ValueError("flags cannot be given with a compiled pattern")
            self.re = pattern
        else:
            self.re = re.compile(pattern, flags=flags)

    def matches(self, s, pos):
        """
        从位置pos开始解析字符串s
        :return: 如果规则匹配，则返回一个`Match`对象；如果不匹配，则返回None
        """
        m = self.re.match(s, pos)
        return Match(*m.span(0)) if m is not None else None

    def __repr__(self):
        return f"RegexMatcher({self.re.pattern!r})"


class LiteralMatcher:
    """匹配固定字符串"""

    def __init__(self, text, ignore_case=False):
        if not text:
            raise ValueError("literal must be non-empty")
        self.text = text
        self.ignore_case = ignore_case
        self._folded = text.casefold() if ignore_case else text

    def matches(self, s, pos):
        end = pos + len(self.text)
        if end > len(s):
            # casefold 可能改变长度，窗口必须完整
            return None
        candidate = s[pos:end]
        if self.ignore_case:
            candidate = candidate.casefold()
        return Match(pos, end) if candidate == self._folded else None

    def __repr__(self):
        return f"LiteralMatcher({self.text!r})"


def _as_matcher(matcher, flags=0):
    if isinstance(matcher, (str, re.Pattern)):
        return RegexMatcher(matcher, flags=flags)
    if flags:
        raise ValueError("flags only apply to regex patterns")
    if not callable(getattr(matcher, "matches", None)):
        raise TypeError(f"{matcher!r} has no matches(s, pos) method")
    return matcher


class Rule:
    """
    封装规则的标签、匹配器和可选的转换函数。
    :param label: 令牌标签。
    :param matcher: 正则字符串、已编译正则，或提供 `matches(s, pos)` 的对象。
    :param transform: 可选，`(label, text) -> Optional[Token]`；返回 None 表示丢弃。
    """

    __slots__ = ("label", "matcher", "transform")

    def __init__(self, label, matcher, transform=None, flags=0):
        if transform is not None and not callable(transform):
            raise TypeError(f"transform for {label!r} is not callable")
        object.__setattr__(self, "label", label)
        object.__setattr__(self, "matcher", _as_matcher(matcher, flags))
        object.__setattr__(self, "transform", transform)

    def __setattr__(self, key, value):
        raise AttributeError("Rule is immutable")

    @property
    def name(self):
        return self.label

    def matches(self, s, pos):
        return self.matcher.matches(s, pos)

    def __repr__(self):
        return f"Rule({self.label!r}, {self.matcher!r})"


class RuleSet:
    """
    有序、不可变的规则序列。顺序即优先级，永不重新排序。
    多个扫描器可以安全地共享同一个 RuleSet。
    """

    def __init__(self, rules=()):
        built = []
        for rule in rules:
            if not isinstance(rule, Rule):
                rule = Rule(*rule)
            built.append(rule)
        self._rules = tuple(built)
        # 检查会产生空令牌的规则
        for rule in self._rules:
            if rule.transform is None and rule.matches("", 0) is not None:
                warnings.warn(
                    f"Rule {rule.label!r} can match the empty string and has no transform",
                    RuleSetWarning, stacklevel=2
                )

    def __iter__(self):
        return iter(self._rules)

    def __len__(self):
        return len(self._rules)

    def __getitem__(self, idx):
        return self._rules[idx]

    def __repr__(self):
        return f"RuleSet({list(self._rules)!r})"

    @property
    def labels(self):
        return [rule.label for rule in self._rules]

    def scan(self, source, min_buffer=0):
        """返回扫描 `source` 的 `Scanner`"""
        from .scanner import Scanner
        return Scanner(self, source, min_buffer=min_buffer)


class ScannerGenerator:
    """
    用于生成规则集。

    >>> from rscan import ScannerGenerator
    >>> sg = ScannerGenerator()
    >>> sg.add('NUMBER', r'\\d+')
    >>> sg.add('ADD', r'\\+')
    >>> sg.ignore(r'\\s+')
    >>> rules = sg.build()
    >>> scanner = rules.scan('1 + 1')
    >>> scanner.next()
    Token('NUMBER', '1')
    >>> scanner.next()
    Token('ADD', '+')
    >>> scanner.next()
    Token('NUMBER', '1')
    >>> scanner.next() is None
    True
    """

    def __init__(self):
        self.rules = []

    def add(self, name, pattern, flags=0, transform=None):
        """添加匹配规则，第一条优先"""
        self.rules.append(Rule(name, pattern, transform=transform, flags=flags))

    def ignore(self, pattern, flags=0, name=""):
        """添加忽略规则，与匹配规则按声明顺序一起尝试"""
        self.rules.append(Rule(name, pattern, transform=skip, flags=flags))

    def build(self):
        """返回一个不可变的 `RuleSet`，其 `scan` 方法返回产生 `Token` 的扫描器。"""
        return RuleSet(self.rules)
