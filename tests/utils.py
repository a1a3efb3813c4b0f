from rscan import InputSource


class RecordingSource(InputSource):
    def __init__(self, record, fragments):
        self.fragments = iter(fragments)
        self.record = record

    def read(self):
        s = "None"
        fragment = None
        try:
            fragment = next(self.fragments)
            s = fragment
        except StopIteration:
            pass
        finally:
            self.record.append(f"read:{s}")
        return fragment


def splits(text):
    """同一段文本的不同片段切分方式"""
    yield [text]
    for i in range(1, len(text)):
        yield [text[:i], text[i:]]
    yield list(text)
    yield [text[i:i + 3] for i in range(0, len(text), 3)]


def pairs(scanner):
    return [(t.name, t.value) for t in scanner]
