"""Localized string tables for checklist reports."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping

Locale = Literal["en", "zh"]

SUPPORTED_LOCALES: tuple[str, ...] = ("en", "zh")

_EN: dict[str, str] = {
    "title": "=== {name} Test Status Check ===",
    "section_test_files": "1. Checking test files:",
    "section_source_files": "2. Checking source files:",
    "section_properties": "3. Property tests implemented:",
    "section_build_files": "4. Build configuration:",
    "section_environment": "5. Build environment:",
    "subtotal_test_files": "Test files: {existing}/{total} exist",
    "subtotal_source_files": "Source files: {existing}/{total} exist",
    "path_line": "{path}",
    "build_present": "{path} exists",
    "build_missing": "{path} missing",
    "wrapper_present": "{path} found",
    "wrapper_missing": "{path} not found",
    "property_implemented": "{label}",
    "property_missing": "{label} - not found",
    "summary_header": "=== SUMMARY ===",
    "all_files_exist": "All required files exist",
    "framework_ready": "Test framework is set up",
    "properties_ready": "Property tests are implemented",
    "properties_incomplete": "Some property tests were not found",
    "integration_ready": "Integration tests are implemented",
    "ready_banner": "\U0001f389 System is ready for final verification!",
    "files_missing": "Some files are missing, implementation needs completion",
    "wrapper_missing_note": "Note: Cannot run tests directly due to missing gradle wrapper.",
    "ide_recommendation": "Recommendation: Open project in Android Studio to run tests.",
    "wrapper_present_hint": "Hint: Run the test suite with the gradle wrapper, e.g. ./gradlew test.",
}

_ZH: dict[str, str] = {
    "title": "=== {name}测试状态检查 ===",
    "section_test_files": "1. 检查测试文件存在性:",
    "section_source_files": "2. 检查源代码文件存在性:",
    "section_properties": "3. 检查属性测试实现:",
    "section_build_files": "4. 检查构建配置:",
    "section_environment": "5. 检查构建环境:",
    "subtotal_test_files": "测试文件统计: {existing}/{total} 存在",
    "subtotal_source_files": "源代码文件统计: {existing}/{total} 存在",
    "path_line": "{path}",
    "build_present": "{path} 存在",
    "build_missing": "{path} 缺失",
    "wrapper_present": "{path} 已找到",
    "wrapper_missing": "{path} 未找到",
    "property_implemented": "{label} - 已实现",
    "property_missing": "{label} - 未找到",
    "summary_header": "=== 总结 ===",
    "all_files_exist": "所有必需文件都存在",
    "framework_ready": "测试框架已设置完成",
    "properties_ready": "属性测试已实现",
    "properties_incomplete": "部分属性测试未找到",
    "integration_ready": "集成测试已实现",
    "ready_banner": "\U0001f389 系统已准备好进行最终验证！",
    "files_missing": "部分文件缺失，需要完成实现",
    "wrapper_missing_note": "注意: 由于缺少gradle wrapper，无法直接运行测试。",
    "ide_recommendation": "建议: 在Android Studio中打开项目并运行测试。",
    "wrapper_present_hint": "提示: 使用gradle wrapper运行测试，例如 ./gradlew test。",
}


@dataclass(frozen=True, slots=True)
class MessageCatalog:
    """Marker glyphs plus message templates for one locale."""

    locale: str
    ok_marker: str
    fail_marker: str
    templates: Mapping[str, str]

    def text(self, key: str, **values: object) -> str:
        return self.templates[key].format(**values)

    def marked(self, ok: bool, key: str, **values: object) -> str:
        """Render a template prefixed with the success or failure glyph."""

        marker = self.ok_marker if ok else self.fail_marker
        return f"{marker} {self.text(key, **values)}"


_CATALOGS: dict[str, MessageCatalog] = {
    "en": MessageCatalog(locale="en", ok_marker="✓", fail_marker="✗", templates=MappingProxyType(_EN)),
    "zh": MessageCatalog(locale="zh", ok_marker="✅", fail_marker="❌", templates=MappingProxyType(_ZH)),
}


def get_catalog(locale: str) -> MessageCatalog:
    """Return the catalog for locale, raising on unsupported values."""

    normalized = locale.strip().lower()
    try:
        return _CATALOGS[normalized]
    except KeyError as exc:
        allowed = ",".join(SUPPORTED_LOCALES)
        raise ValueError(f"Unsupported locale {locale!r}; expected one of: {allowed}") from exc
