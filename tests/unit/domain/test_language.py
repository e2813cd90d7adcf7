"""
语言标签单元测试
"""
import pytest

from code_runner.domain.value_objects.language import LanguageTag
from code_runner.shared.errors.domain import ValidationError


class TestLanguageTag:
    """语言标签测试"""

    @pytest.mark.parametrize("tag", list(LanguageTag))
    def test_round_trip_through_lowercase(self, tag):
        """测试所有语言都能通过小写文本往返解析"""
        assert LanguageTag.parse(tag.value.lower()) is tag

    @pytest.mark.parametrize("text,expected", [
        ("Python", LanguageTag.PYTHON),
        ("PYTHON", LanguageTag.PYTHON),
        ("JavaScript", LanguageTag.JAVASCRIPT),
        ("Golang", LanguageTag.GOLANG),
        ("KoTlIn", LanguageTag.KOTLIN),
        (" python ", LanguageTag.PYTHON),
    ])
    def test_parse_case_insensitive(self, text, expected):
        """测试大小写不敏感解析"""
        assert LanguageTag.parse(text) is expected

    @pytest.mark.parametrize("text", ["ruby", "", "py", "go", "java"])
    def test_parse_unsupported(self, text):
        """测试不支持的语言抛出验证错误，不回退到默认值"""
        with pytest.raises(ValidationError, match="Unsupported language"):
            LanguageTag.parse(text)

    def test_parse_passes_through_enum(self):
        """测试传入枚举成员时原样返回"""
        assert LanguageTag.parse(LanguageTag.GOLANG) is LanguageTag.GOLANG
