class RuleSetWarning(Warning):
    pass


class ScanError(Exception):
    """扫描错误基类，携带消息和源位置"""

    def __init__(self, message, source_pos=None):
        super().__init__(message)
        self.message = message
        self.source_pos = source_pos

    def get_source_pos(self):
        return self.source_pos

    def __repr__(self):
        return f'{type(self).__name__}({self.message!r}, {self.source_pos!r})'


class UnmatchedInputError(ScanError):
    """在输入已耗尽且剩余文本非空时，没有任何规则匹配"""

    def __init__(self, message, source_pos=None, snippet=""):
        super().__init__(message, source_pos)
        self.snippet = snippet


class NoProgressError(ScanError):
    """零长度匹配在同一位置反复产生令牌，扫描无法前进"""


class TransformError(ScanError):
    """规则的转换函数报告失败"""

    def __init__(self, message, source_pos=None, label=None):
        super().__init__(message, source_pos)
        self.label = label
