"""Match semantics for customer targeting and pricing."""

# Rule names for reference in tests and audit
RULE_DISABLED_MATCHES_ALL = "disabled dimension: matches every customer, ignores stored value"
RULE_GENDER_EXACT = "gender: customer.gender == value unless value is ANY; missing gender fails"
RULE_AGE_INCLUSIVE = "ageRange: min <= currentYear - birthYear <= max (inclusive)"
RULE_AGE_MISSING_BIRTH_YEAR = "ageRange: missing birthYear handled by MissingBirthYearPolicy (default: year 0)"
RULE_REGION_AND = "region: sido and sigungu each checked when set (AND, not hierarchical)"
RULE_RADIUS_HAVERSINE = "radius: haversine distance <= meters; missing coordinates fail"
RULE_PRICE_BY_ACTIVE_COUNT = "pricing: unit price indexed by active filter count, clamped to last tier"
RULE_COST_EXACT = "pricing: estimatedCost = recipients * unitPrice; zero cost blocks submission"
