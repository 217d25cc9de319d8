"""Pytest configuration and shared fixtures for pmd-rules-ko tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pmd_rules_ko.rule import Rule, RuleProperty, Rules

if TYPE_CHECKING:
    from pathlib import Path

DESIGN_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<ruleset name="설계"
    xmlns="http://pmd.sourceforge.net/ruleset/2.0.0">
    <description>설계 규칙</description>

    <rule name="SimplifyBooleanReturns"
          language="java"
          since="0.9"
          message="불필요한 if 문을 단순화하세요"
          class="net.sourceforge.pmd.lang.java.rule.design.SimplifyBooleanReturnsRule"
          externalInfoUrl="${pmd.website.baseurl}/pmd_rules_java_design.html#simplifybooleanreturns">
        <description>
불리언 값을 반환하는 if 문은 `return` 으로 단순화할 수 있습니다.
        </description>
        <priority>3</priority>
        <example>
<![CDATA[
public boolean isBar() {
    if (bar) { return true; } else { return false; }
}
]]>
        </example>
    </rule>

    <rule name="CyclomaticComplexity"
          message="복잡도가 너무 높습니다"
          since="1.03"
          class="net.sourceforge.pmd.lang.java.rule.design.CyclomaticComplexityRule"
          externalInfoUrl="${pmd.website.baseurl}/pmd_rules_java_design.html#cyclomaticcomplexity">
        <description><![CDATA[순환 복잡도를 측정합니다.]]></description>
        <priority>3</priority>
        <properties>
            <property name="classReportLevel" type="Integer" description="클래스 보고 임계값" min="1" max="600" value="80"/>
            <property name="methodReportLevel" type="Integer" description="메서드 보고 임계값" min="1" max="50">
                <value>10</value>
            </property>
            <property name="version" value="2.0"/>
        </properties>
    </rule>

    <rule name="OldDesignRule" ref="category/java/design.xml/NewDesignRule" deprecated="true"/>

    <rule name="AvoidDeeplyNestedIfStmts"
          since="1.0"
          message="if 문이 너무 깊게 중첩되었습니다"
          class="net.sourceforge.pmd.lang.rule.xpath.XPathRule"
          externalInfoUrl="${pmd.website.baseurl}/pmd_rules_java_design.html#avoiddeeplynestedifstmts">
        <description>깊게 중첩된 if 문은 읽기 어렵습니다.</description>
        <priority>1</priority>
        <properties>
            <property name="xpath">
                <value><![CDATA[//IfStatement]]></value>
            </property>
        </properties>
    </rule>

    <rule ref="category/java/design.xml/SimplifyBooleanReturns">
        <priority>5</priority>
    </rule>

    <rule since="1.0" message="이름 없음">
        <description>이름이 없는 규칙</description>
    </rule>
</ruleset>
"""

ERRORPRONE_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<ruleset name="오류 가능성">
    <rule name="EmptyCatchBlock"
          since="0.1"
          message="빈 catch 블록"
          class="net.sourceforge.pmd.lang.rule.xpath.XPathRule"
          externalInfoUrl="${pmd.website.baseurl}/pmd_rules_java_errorprone.html#emptycatchblock"
          maximumLanguageVersion="17"
          minimumLanguageVersion="1.5">
        <description>빈 catch 블록은 예외를 숨깁니다.</description>
        <priority>abc</priority>
        <example>try {} catch (Exception e) {}</example>
        <example>   </example>
        <example>second</example>
    </rule>

    <rule name="AssignmentInOperand" since="1.03" message="피연산자 안의 할당">
        <description>d</description>
        <priority>2</priority>
    </rule>
</ruleset>
"""

TIERS_TOML = """\
# test tiers

[AvoidDeeplyNestedIfStmts]
tier = 2
claude_comment = "권장 - 중첩을 줄이세요"

[CyclomaticComplexity]
tier = 3
claude_comment = "선택 - 복잡도 지표"

[SimplifyBooleanReturns]
tier = 3
claude_comment = "선택 - 단순화"

[AssignmentInOperand]
tier = "skip"
claude_comment = "제외 - 오탐이 많습니다"

[EmptyCatchBlock]
tier = 1
claude_comment = "필수 - 예외를 삼키지 마세요"

[RemovedRule]
tier = 2
claude_comment = "권장 - 더 이상 없는 규칙"
"""


@pytest.fixture(name="design_xml")
def _design_xml() -> str:
    """Design category document for tests.

    Returns:
        XML text with three rule definitions, two references and one
        nameless rule.

    """
    return DESIGN_XML


@pytest.fixture(name="errorprone_xml")
def _errorprone_xml() -> str:
    """Error-prone category document for tests.

    Returns:
        XML text with two rule definitions.

    """
    return ERRORPRONE_XML


@pytest.fixture(name="resources_dir")
def _resources_dir(tmp_path: Path) -> Path:
    """Directory with two category files and one unknown file.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        Path to the resources directory.

    """
    resources = tmp_path / "resources"
    resources.mkdir()
    (resources / "design_ko.xml").write_text(DESIGN_XML, encoding="utf-8")
    (resources / "errorprone_ko.xml").write_text(ERRORPRONE_XML, encoding="utf-8")
    (resources / "extra_ko.xml").write_text(ERRORPRONE_XML, encoding="utf-8")
    (resources / "notes.txt").write_text("not a ruleset", encoding="utf-8")
    return resources


@pytest.fixture(name="tiers_path")
def _tiers_path(tmp_path: Path) -> Path:
    """Tier table covering the test catalogue plus one stale entry.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        Path to the TOML file.

    """
    path = tmp_path / "tiers.toml"
    path.write_text(TIERS_TOML, encoding="utf-8")
    return path


@pytest.fixture(name="sample_rules")
def _sample_rules() -> Rules:
    """Small hand-built catalogue for viewer and serialization tests.

    Returns:
        Rules object in catalogue order.

    """
    return Rules(
        rules=[
            Rule(
                category="bestpractices",
                category_name="모범 사례",
                description="매개변수를 재할당하지 마세요.",
                examples=["void foo(int a) { a = 1; }"],
                message="매개변수 재할당",
                name="AvoidReassigningParameters",
                priority=2,
                since="1.0",
            ),
            Rule(
                category="design",
                category_name="설계",
                description="<p>순환 복잡도를 측정합니다.</p>",
                external_info_url="https://docs.pmd-code.org/latest/x.html",
                message="복잡도가 너무 높습니다",
                name="CyclomaticComplexity",
                priority=3,
                properties=[
                    RuleProperty(
                        default_value="80",
                        description="클래스 보고 임계값",
                        name="classReportLevel",
                    )
                ],
                rule_class="net.sourceforge.pmd.lang.java.rule.design.Cyclomatic",
                since="1.03",
            ),
            Rule(
                category="security",
                category_name="보안",
                description="하드코딩된 암호화 키",
                max_language_version="17",
                message="Crypto 키를 하드코딩하지 마세요",
                min_language_version="1.8",
                name="HardCodedCryptoKey",
                priority=1,
                since="6.4.0",
            ),
        ]
    )
