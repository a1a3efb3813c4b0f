class SourcePosition:
    """封装源位置信息（索引，行号，列号）"""

    __slots__ = ("idx", "lineno", "colno")

    def __init__(self, idx, lineno, colno):
        self.idx = idx
        self.lineno = lineno
        self.colno = colno

    def __repr__(self):
        return f"SourcePosition(idx={self.idx}, lineno={self.lineno}, colno={self.colno})"

    def __eq__(self, other):
        if not isinstance(other, SourcePosition):
            return NotImplemented
        return (self.idx, self.lineno, self.colno) == (other.idx, other.lineno, other.colno)

    def __hash__(self):
        return hash((self.idx, self.lineno, self.colno))


class Token:
    """
    扫描器生成的令牌（不可变）。
    :param name: 规则标签。
    :param value: 负载，由规则决定（字符串、整数、带符号增量等）。
    :param source_pos: 匹配起点的源位置，由扫描器填写。
    """

    __slots__ = ("_name", "_value", "_source_pos")

    def __init__(self, name, value, source_pos=None):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_source_pos", source_pos)

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def name(self):
        return self._name

    @property
    def value(self):
        return self._value

    @property
    def source_pos(self):
        return self._source_pos

    def __repr__(self):
        return f"Token({self.name!r}, {self.value!r})"

    def __eq__(self, other):
        if not isinstance(other, Token):
            # 尝试other的比较方法
            return NotImplemented
        return self.name == other.name and self.value == other.value

    def __hash__(self):
        return hash((self.name, self.value))

    def at(self, source_pos):
        """返回一个带有新源位置的副本"""
        return Token(self.name, self.value, source_pos)

    def get_type(self):
        return self.name

    def get_source_pos(self):
        return self.source_pos

    def get_str(self):
        return self.value
