"""
常用的规则转换函数。

转换函数的签名为 `(label, text) -> Optional[Token]`，返回 None 表示该匹配不产生令牌。
"""
from .box import Token


def skip(label, text):
    """丢弃匹配文本（空白、注释等）"""
    return None


def constant(value):
    """返回一个总是产生固定负载的转换函数，例如括号的 +1 / -1"""
    def transform(label, text):
        return Token(label, value)
    return transform


def strip_quotes(label, text):
    """去掉一对匹配的单引号或双引号"""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        text = text[1:-1]
    return Token(label, text)


def lowercase(label, text):
    return Token(label, text.lower())


def to_int(label, text):
    # ValueError 由扫描器包装为 TransformError
    return Token(label, int(text))
