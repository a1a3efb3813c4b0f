import logging

from .box import SourcePosition, Token
from .errors import NoProgressError, ScanError, TransformError, UnmatchedInputError
from .rules import RuleSet
from .sources import DEFAULT_CHUNK_SIZE, as_source

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 20


class Scanner:
    """
    扫描器（令牌流）：把规则集应用于输入源，按需产生 `Token`。

    `next()` 消费并返回下一个令牌，`peek()` 只查看不消费；两者在流结束时返回 None。
    缓冲区只保存未消费的文本，所以匹配器总是从游标处开始看到文本。
    :param rules: `RuleSet`，或者可以构造 `RuleSet` 的规则序列。
    :param source: `InputSource`、字符串、文件对象或字符串可迭代对象。
    :param min_buffer: 尝试匹配前至少保留的未消费字符数（输入耗尽时除外）。
    """

    def __init__(self, rules, source, min_buffer=0):
        if min_buffer < 0:
            raise ValueError("min_buffer must be >= 0")
        self.rules = rules if isinstance(rules, RuleSet) else RuleSet(rules)
        self.source = as_source(source)
        self.min_buffer = min_buffer
        self._buffer = ""
        # 已从输入源读出、尚未放入缓冲区的文本
        self._pending = ""
        self._pending_pos = 0
        self._exhausted = False
        self._idx = 0
        self._lineno = 1
        self._colno = 1
        # 单槽前瞻；_peeked 区分“未前瞻”和“前瞻到流结束”
        self._peeked = False
        self._lookahead = None
        self._finished = False
        self._error = None
        # 上一个零长度令牌的位置
        self._empty_at = None

    def __iter__(self):
        return self

    def __next__(self):
        token = self.next()
        if token is None:
            raise StopIteration
        return token

    @property
    def position(self):
        """游标的源位置"""
        return SourcePosition(self._idx, self._lineno, self._colno)

    def next(self):
        """消费并返回下一个令牌；流结束时返回 None"""
        if self._peeked:
            token = self._lookahead
            self._peeked = False
            self._lookahead = None
            return token
        return self._scan()

    def peek(self):
        """返回下一个令牌但不消费它；流结束时返回 None"""
        if not self._peeked:
            self._lookahead = self._scan()
            self._peeked = True
        return self._lookahead

    def _scan(self):
        if self._error is not None:
            raise self._error
        if self._finished:
            return None
        try:
            token = self._scan_token()
        except ScanError as e:
            # 错误对该扫描器是致命的，之后的调用重复抛出
            self._error = e
            logger.debug("scan failed at %r: %s", e.source_pos, e.message)
            raise
        except Exception as e:
            # 输入源或转换函数的失败同样是致命的，已读出的片段无法退回
            self._error = e
            logger.debug("scan failed at offset %d: %r", self._idx, e)
            raise
        if token is None:
            self._finished = True
        return token

    def _scan_token(self):
        while True:
            if not self._exhausted and len(self._buffer) < max(self.min_buffer, 1):
                self._fill()
                continue
            if not self._buffer:
                return None

            for rule in self.rules:
                match = rule.matches(self._buffer, 0)
                if match is None:
                    continue
                if match.end >= len(self._buffer) and not self._exhausted:
                    # 匹配到达缓冲区末尾，后续片段可能延长它
                    self._fill()
                    break
                source_pos = self.position
                text = self._buffer[:match.end]
                token = self._apply(rule, text, source_pos)
                if not text:
                    if token is None:
                        # 零长度且没有令牌，没有进展：尝试下一条规则
                        continue
                    if self._empty_at == self._idx:
                        raise NoProgressError(
                            f"rule {rule.label!r} keeps matching the empty string "
                            f"at line {source_pos.lineno}, column {source_pos.colno}",
                            source_pos
                        )
                    self._empty_at = self._idx
                    return token
                self._consume(text)
                if token is not None:
                    return token
                break
            else:
                if not self._exhausted:
                    # 可能是被片段截断的前缀
                    self._fill()
                    continue
                pos = self.position
                snippet = self._buffer[:SNIPPET_LENGTH]
                raise UnmatchedInputError(
                    f"no rule matches {snippet!r} at line {pos.lineno}, column {pos.colno}",
                    pos, snippet
                )

    def _apply(self, rule, text, source_pos):
        if rule.transform is None:
            return Token(rule.label, text, source_pos)
        try:
            token = rule.transform(rule.label, text)
        except TransformError as e:
            if e.source_pos is None:
                e.source_pos = source_pos
            if e.label is None:
                e.label = rule.label
            raise
        except ValueError as e:
            raise TransformError(
                f"transform for {rule.label!r} failed on {text!r}: {e}", source_pos, rule.label
            ) from e
        if token is None:
            return None
        if not isinstance(token, Token):
            raise TypeError(f"transform for {rule.label!r} returned {type(token).__name__}, not Token")
        if token.source_pos is None:
            token = token.at(source_pos)
        return token

    def _consume(self, text):
        self._buffer = self._buffer[len(text):]
        self._idx += len(text)
        newlines = text.count("\n")
        if newlines:
            self._lineno += newlines
            self._colno = len(text) - text.rfind("\n")
        else:
            self._colno += len(text)

    def _fill(self):
        """
        扩大缓冲区：至少追加与当前缓冲区等长的文本（倍增），
        大片段按 DEFAULT_CHUNK_SIZE 分块放入，其余留在 _pending 中。
        """
        want = max(len(self._buffer), 1)
        offset = self._idx + len(self._buffer)
        pieces = []
        added = 0
        while added < want:
            if self._pending_pos >= len(self._pending):
                fragment = self.source.read()
                if fragment is None:
                    self._exhausted = True
                    logger.debug("input source exhausted at offset %d", offset + added)
                    break
                if not isinstance(fragment, str):
                    raise TypeError(f"input source returned {type(fragment).__name__}, not str")
                logger.debug("pulled %d characters at offset %d", len(fragment), offset + added)
                self._pending = fragment
                self._pending_pos = 0
                continue
            take = max(want - added, DEFAULT_CHUNK_SIZE)
            piece = self._pending[self._pending_pos:self._pending_pos + take]
            self._pending_pos += len(piece)
            pieces.append(piece)
            added += len(piece)
        if self._pending_pos >= len(self._pending):
            self._pending = ""
            self._pending_pos = 0
        self._buffer += "".join(pieces)


def make_scanner(rules, source, min_buffer=0):
    """用规则序列和输入源构造 `Scanner`"""
    return Scanner(rules, source, min_buffer=min_buffer)
