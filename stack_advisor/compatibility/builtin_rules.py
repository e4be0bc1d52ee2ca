"""
Builtin Rules - 内置兼容性规则

新的冲突逻辑通过注册规则数据添加，而不是修改检测流程
"""

from itertools import combinations
from typing import Dict, List, Sequence, Tuple

from .models import CompatibilityRule, Conflict, Severity
from .registry import RuleRegistry


# 互斥模块组：同组内任意两个模块同时出现即冲突
EXCLUSIVE_GROUPS: Dict[str, Tuple[Severity, Tuple[str, ...]]] = {
    "auth": (Severity.HIGH, ("auth-firebase", "auth-supabase", "auth-cognito")),
    "payment": (Severity.LOW, ("payment-stripe", "payment-paypal")),
    "database": (Severity.MEDIUM, ("database-postgres", "database-mongodb", "database-mysql")),
}

# 模块 -> 支持的框架
FRAMEWORK_SUPPORT: Dict[str, Tuple[str, ...]] = {
    "ui-tailwind": ("nextjs", "react-native"),
    "ui-material": ("nextjs", "react-native", "flutter"),
    "ui-chakra": ("nextjs",),
    "mobile-navigation": ("react-native", "flutter"),
    "web-analytics": ("nextjs", "sveltekit"),
}

# 模块 -> 支持的平台
PLATFORM_SUPPORT: Dict[str, Tuple[str, ...]] = {
    "desktop-auto-update": ("desktop",),
    "mobile-push": ("ios", "android", "mobile"),
}


def all_of(
    name: str,
    modules: Sequence[str],
    conflict_type: str,
    severity: Severity,
    description: str,
    resolution: str,
) -> CompatibilityRule:
    """所有给定模块同时出现时匹配"""
    required = tuple(modules)

    def predicate(module_set, framework, platform):
        return all(m in module_set for m in required)

    return CompatibilityRule(
        name=name,
        predicate=predicate,
        conflict=Conflict(
            type=conflict_type,
            severity=severity,
            description=description,
            affected=required,
            resolution=resolution,
        ),
    )


def exclusive_pairs(
    group: str,
    modules: Sequence[str],
    severity: Severity,
) -> List[CompatibilityRule]:
    """为互斥组中的每一对模块生成一条规则"""
    return [
        all_of(
            name=f"{group}:{a}+{b}",
            modules=(a, b),
            conflict_type=group,
            severity=severity,
            description=f"Modules '{a}' and '{b}' provide the same {group} capability",
            resolution=f"Choose only one {group} module: {a} or {b}",
        )
        for a, b in combinations(modules, 2)
    ]


def framework_restricted(
    module: str,
    frameworks: Sequence[str],
    severity: Severity = Severity.MEDIUM,
) -> CompatibilityRule:
    """模块存在且目标框架不在支持列表中时匹配"""
    allowed = tuple(frameworks)

    def predicate(module_set, framework, platform):
        return module in module_set and framework not in allowed

    return CompatibilityRule(
        name=f"framework:{module}",
        predicate=predicate,
        conflict=Conflict(
            type="framework",
            severity=severity,
            description=f"Module '{module}' only supports: {', '.join(allowed)}",
            affected=(module,),
            resolution=f"Replace '{module}' with an alternative compatible with the target framework",
        ),
    )


def platform_restricted(
    module: str,
    platforms: Sequence[str],
    severity: Severity = Severity.CRITICAL,
) -> CompatibilityRule:
    """模块存在且目标平台不在支持列表中时匹配"""
    allowed = tuple(platforms)

    def predicate(module_set, framework, platform):
        return module in module_set and platform not in allowed

    return CompatibilityRule(
        name=f"platform:{module}",
        predicate=predicate,
        conflict=Conflict(
            type="platform",
            severity=severity,
            description=f"Module '{module}' cannot run outside: {', '.join(allowed)}",
            affected=(module,),
            resolution=f"Remove '{module}' or target one of: {', '.join(allowed)}",
        ),
    )


def builtin_rules() -> List[CompatibilityRule]:
    """内置规则，按求值顺序排列"""
    rules = [
        all_of(
            name="payment:stripe+paypal",
            modules=("stripe", "paypal"),
            conflict_type="feature",
            severity=Severity.LOW,
            description="Multiple payment providers detected",
            resolution="Consider using payment abstraction layer",
        ),
    ]

    for group, (severity, modules) in EXCLUSIVE_GROUPS.items():
        rules.extend(exclusive_pairs(group, modules, severity))

    for module, frameworks in FRAMEWORK_SUPPORT.items():
        rules.append(framework_restricted(module, frameworks))

    for module, platforms in PLATFORM_SUPPORT.items():
        rules.append(platform_restricted(module, platforms))

    return rules


def default_registry() -> RuleRegistry:
    """每次调用构造一个新的注册表"""
    return RuleRegistry(builtin_rules())
