"""
输入源：按需提供原始文本片段。

`read()` 返回一个字符串片段，或者返回 None 表示输入已耗尽。
片段可以在任意位置切分文本，扫描器不假设一个片段包含完整的令牌。
"""
DEFAULT_CHUNK_SIZE = 4096


class InputSource:
    """输入源基类"""

    def read(self):
        raise NotImplementedError

    def __iter__(self):
        while True:
            fragment = self.read()
            if fragment is None:
                return
            yield fragment


class StringSource(InputSource):
    """按 `chunk_size` 切分一个字符串"""

    def __init__(self, text, chunk_size=DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.text = text
        self.chunk_size = chunk_size
        self._pos = 0

    def read(self):
        if self._pos >= len(self.text):
            return None
        fragment = self.text[self._pos:self._pos + self.chunk_size]
        self._pos += len(fragment)
        return fragment


class IterableSource(InputSource):
    """从任意字符串可迭代对象（列表、生成器等）读取片段"""

    def __init__(self, fragments):
        self._it = iter(fragments)
        self._done = False

    def read(self):
        if self._done:
            return None
        try:
            fragment = next(self._it)
        except StopIteration:
            self._done = True
            return None
        if not isinstance(fragment, str):
            raise TypeError(f"fragments must be str, got {type(fragment).__name__}")
        return fragment


class FileSource(InputSource):
    """
    从类文件对象读取。文件由调用者打开和关闭。
    :param fileobj: 提供 `read(n)` 的文本文件对象。
    :param chunk_size: 每次读取的字符数。
    """

    def __init__(self, fileobj, chunk_size=DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.fileobj = fileobj
        self.chunk_size = chunk_size
        self._done = False

    def read(self):
        if self._done:
            return None
        fragment = self.fileobj.read(self.chunk_size)
        if not fragment:
            self._done = True
            return None
        if not isinstance(fragment, str):
            raise TypeError("FileSource needs a file opened in text mode")
        return fragment


def as_source(obj):
    """把字符串、文件对象或字符串可迭代对象转换为 `InputSource`"""
    if isinstance(obj, InputSource):
        return obj
    if isinstance(obj, str):
        return StringSource(obj)
    if callable(getattr(obj, "read", None)):
        return FileSource(obj)
    try:
        return IterableSource(obj)
    except TypeError:
        raise TypeError(f"cannot read text from {type(obj).__name__}") from None
