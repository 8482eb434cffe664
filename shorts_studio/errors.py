"""
Shorts Studio - 例外定義

各ハンドラはこれらの例外を境界で捕捉し、`{success: false, error}` 形式に変換する
"""


class ShortsStudioError(Exception):
    """基底エラー"""

    status_code = 500


class InvalidInputError(ShortsStudioError):
    """呼び出し側の入力が不正"""

    status_code = 400


class ConfigurationError(ShortsStudioError):
    """必要な環境変数が未設定"""

    pass


class GenerationError(ShortsStudioError):
    """台本生成エラー（API呼び出し失敗・応答の解析失敗）"""

    pass


class SchemaError(GenerationError):
    """生成結果が必須フィールドを満たさない"""

    pass


class UpstreamError(ShortsStudioError):
    """YouTube APIが利用できない結果を返した"""

    pass
