def normalize_code(v: object) -> object:
    """IATA コード等の入力を前後空白除去・大文字化する"""
    if isinstance(v, str):
        return v.strip().upper()
    return v


def blank_to_none(v: object) -> object:
    """空文字列を None として扱う（クエリ文字列の未指定と同一視）"""
    if isinstance(v, str) and not v.strip():
        return None
    return v
