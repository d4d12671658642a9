"""
Default benchmark tables for the Saudi market (SAR).

Rates are percentages (CTR 1.4 == 1.4%). Modifiers are multipliers around 1.0.
Keys use the normalized form produced by benchmarks.normalize_key().
Override any subset through config/benchmarks.json.
"""

PLATFORMS = {
    "meta":         {"base_cpm": 4.2,  "base_ctr": 1.4, "base_cvr": 3.2, "optimal_budget_min": 5000},
    "google_ads":   {"base_cpm": 5.8,  "base_ctr": 2.2, "base_cvr": 4.0, "optimal_budget_min": 3000},
    "youtube":      {"base_cpm": 5.5,  "base_ctr": 0.9, "base_cvr": 1.9, "optimal_budget_min": 8000},
    "tiktok":       {"base_cpm": 4.2,  "base_ctr": 1.6, "base_cvr": 2.2, "optimal_budget_min": 3000},
    "snapchat":     {"base_cpm": 3.5,  "base_ctr": 1.1, "base_cvr": 1.7, "optimal_budget_min": 2000},
    "linkedin":     {"base_cpm": 22.5, "base_ctr": 0.6, "base_cvr": 3.8, "optimal_budget_min": 8000},
    "x":            {"base_cpm": 7.5,  "base_ctr": 0.9, "base_cvr": 1.4, "optimal_budget_min": 4000},
    "programmatic": {"base_cpm": 3.8,  "base_ctr": 0.6, "base_cvr": 1.0, "optimal_budget_min": 10000},
}

INDUSTRIES = {
    "default":             {"cpm_mod": 1.0,  "ctr_mod": 1.0,  "cvr_mod": 1.0,  "avg_order_value": 200,   "avg_cac": 80,  "min_budget": 5000},
    "e_commerce":          {"cpm_mod": 1.05, "ctr_mod": 1.15, "cvr_mod": 1.25, "avg_order_value": 380,   "avg_cac": 65,  "min_budget": 8000},
    "real_estate":         {"cpm_mod": 1.35, "ctr_mod": 0.95, "cvr_mod": 0.85, "avg_order_value": 12000, "avg_cac": 450, "min_budget": 15000},
    "financial_services":  {"cpm_mod": 1.45, "ctr_mod": 0.85, "cvr_mod": 0.9,  "avg_order_value": 1800,  "avg_cac": 350, "min_budget": 20000},
    "tech_saas":           {"cpm_mod": 1.25, "ctr_mod": 0.95, "cvr_mod": 1.15, "avg_order_value": 2200,  "avg_cac": 280, "min_budget": 12000},
    "education":           {"cpm_mod": 1.15, "ctr_mod": 1.05, "cvr_mod": 1.25, "avg_order_value": 3500,  "avg_cac": 180, "min_budget": 10000},
    "tourism_hospitality": {"cpm_mod": 1.05, "ctr_mod": 1.2,  "cvr_mod": 1.15, "avg_order_value": 950,   "avg_cac": 140, "min_budget": 8000},
    "automotive":          {"cpm_mod": 1.25, "ctr_mod": 1.0,  "cvr_mod": 0.95, "avg_order_value": 5500,  "avg_cac": 380, "min_budget": 20000},
    "restaurants_cafes":   {"cpm_mod": 0.95, "ctr_mod": 1.35, "cvr_mod": 1.35, "avg_order_value": 140,   "avg_cac": 35,  "min_budget": 4000},
    "healthcare":          {"cpm_mod": 1.35, "ctr_mod": 1.0,  "cvr_mod": 1.05, "avg_order_value": 520,   "avg_cac": 200, "min_budget": 12000},
    "retail":              {"cpm_mod": 1.05, "ctr_mod": 1.2,  "cvr_mod": 1.3,  "avg_order_value": 320,   "avg_cac": 55,  "min_budget": 6000},
    "events":              {"cpm_mod": 1.4,  "ctr_mod": 0.9,  "cvr_mod": 1.15, "avg_order_value": 650,   "avg_cac": 250, "min_budget": 15000},
    "apps_tech":           {"cpm_mod": 1.3,  "ctr_mod": 1.1,  "cvr_mod": 1.4,  "avg_order_value": 450,   "avg_cac": 120, "min_budget": 8000},
    "fashion":             {"cpm_mod": 1.1,  "ctr_mod": 1.25, "cvr_mod": 1.2,  "avg_order_value": 280,   "avg_cac": 70,  "min_budget": 6000},
    "sports_fitness":      {"cpm_mod": 1.05, "ctr_mod": 1.15, "cvr_mod": 1.1,  "avg_order_value": 180,   "avg_cac": 45,  "min_budget": 5000},
}

SEASONS = {
    "none":           {"cpm_mult": 1.0,  "ctr_mult": 1.0,  "cvr_mult": 1.0},
    "ramadan":        {"cpm_mult": 1.35, "ctr_mult": 1.15, "cvr_mult": 1.25,
                       "insight": "During Ramadan expect higher engagement but also heavier competition. "
                                  "Favor content that fits the spirit of the month."},
    "hajj":           {"cpm_mult": 1.12, "ctr_mult": 1.02, "cvr_mult": 1.15},
    "umrah":          {"cpm_mult": 1.15, "ctr_mult": 1.08, "cvr_mult": 1.22},
    "back_to_school": {"cpm_mult": 1.25, "ctr_mult": 1.12, "cvr_mult": 1.35},
    "white_friday":   {"cpm_mult": 1.45, "ctr_mult": 1.35, "cvr_mult": 1.55,
                       "insight": "White Friday is a high-stakes window. Budgets should rise to capture "
                                  "strong purchase intent, and CAC will rise with them."},
    "summer":         {"cpm_mult": 0.88, "ctr_mult": 0.95, "cvr_mult": 0.82},
    "national_day":   {"cpm_mult": 1.28, "ctr_mult": 1.22, "cvr_mult": 1.18},
    "founding_day":   {"cpm_mult": 1.22, "ctr_mult": 1.18, "cvr_mult": 1.12},
    "eid_al_fitr":    {"cpm_mult": 1.30, "ctr_mult": 1.20, "cvr_mult": 1.25},
    "eid_al_adha":    {"cpm_mult": 1.25, "ctr_mult": 1.15, "cvr_mult": 1.20},
}

DEFAULT_SEASON_INSIGHT = "No specific seasonal lift applied. Focus on evergreen content and consistent performance."

# pairs of seasons that should not be planned together
SEASON_CONFLICTS = []

CREATIVES = {
    "video":              {"cpm": 1.15, "ctr": 1.35, "cvr": 1.25},
    "static":             {"cpm": 1.0,  "ctr": 1.0,  "cvr": 1.0},
    "carousel":           {"cpm": 1.05, "ctr": 1.15, "cvr": 1.10},
    "stories":            {"cpm": 1.08, "ctr": 1.25, "cvr": 1.15},
    "high_quality":       {"cpm": 1.10, "ctr": 1.20, "cvr": 1.15},
    "low_quality":        {"cpm": 0.90, "ctr": 0.85, "cvr": 0.90},
    "ugc":                {"cpm": 0.95, "ctr": 1.30, "cvr": 1.20},
    "influencer_content": {"cpm": 1.20, "ctr": 1.40, "cvr": 1.30},
    "brand_content":      {"cpm": 1.05, "ctr": 1.05, "cvr": 1.10},
}

COMPETITION = {
    "low":     {"cpm": 0.85, "ctr": 1.15, "cvr": 1.10},
    "medium":  {"cpm": 1.0,  "ctr": 1.0,  "cvr": 1.0},
    "high":    {"cpm": 1.25, "ctr": 0.90, "cvr": 0.95},
    "extreme": {"cpm": 1.50, "ctr": 0.80, "cvr": 0.85},
}


def _demo(rows, female, male):
    """Build one platform's demographic table from (cpm, ctr, cvr) age rows and (ctr, cvr) gender rows."""
    buckets = ["18-24", "25-34", "35-44", "45-54", "45+"]
    table = {}
    for bucket, (cpm, ctr, cvr) in zip(buckets, rows):
        table[f"age_{bucket}"] = {"cpm": cpm, "ctr": ctr, "cvr": cvr}
    table["gender_female"] = {"ctr": female[0], "cvr": female[1]}
    table["gender_male"] = {"ctr": male[0], "cvr": male[1]}
    return table


DEMOGRAPHICS = {
    "meta": _demo([(0.9, 1.3, 0.8), (0.95, 1.2, 1.0), (1.05, 1.0, 1.1), (1.15, 0.9, 1.15), (1.2, 0.8, 1.2)],
                  female=(1.15, 1.2), male=(0.9, 0.95)),
    "google_ads": _demo([(0.85, 1.1, 0.7), (0.9, 1.05, 0.95), (1.0, 1.0, 1.0), (1.1, 0.95, 1.05), (1.25, 0.85, 1.1)],
                        female=(1.1, 1.15), male=(0.95, 0.9)),
    "youtube": _demo([(0.8, 1.4, 0.6), (0.85, 1.2, 0.8), (0.95, 1.0, 1.0), (1.1, 0.9, 1.1), (1.3, 0.7, 1.2)],
                     female=(1.2, 1.1), male=(0.9, 0.95)),
    "tiktok": _demo([(0.8, 1.4, 0.9), (0.9, 1.2, 1.0), (1.1, 0.9, 0.95), (1.3, 0.7, 0.8), (1.4, 0.7, 0.7)],
                    female=(1.3, 1.1), male=(0.8, 0.9)),
    "snapchat": _demo([(0.85, 1.3, 0.8), (0.95, 1.1, 0.95), (1.1, 0.9, 1.0), (1.25, 0.8, 0.9), (1.35, 0.7, 0.8)],
                      female=(1.25, 1.15), male=(0.85, 0.9)),
    "linkedin": _demo([(1.3, 0.7, 0.6), (1.1, 0.9, 0.9), (1.0, 1.0, 1.0), (0.95, 1.1, 1.1), (0.9, 1.2, 1.15)],
                      female=(1.05, 1.1), male=(0.98, 0.95)),
    "x": _demo([(0.9, 1.1, 0.8), (0.95, 1.05, 0.95), (1.0, 1.0, 1.0), (1.1, 0.95, 1.05), (1.2, 0.9, 1.1)],
               female=(1.1, 1.05), male=(0.95, 0.98)),
    "programmatic": _demo([(0.85, 1.1, 0.8), (0.9, 1.05, 0.95), (1.0, 1.0, 1.0), (1.1, 0.95, 1.05), (1.2, 0.9, 1.1)],
                          female=(1.05, 1.1), male=(0.98, 0.95)),
}

LOCATIONS = {
    "riyadh":           {"cpm_mod": 1.25, "cvr_mod": 1.2},
    "jeddah":           {"cpm_mod": 1.1,  "cvr_mod": 1.1},
    "dammam":           {"cpm_mod": 1.1,  "cvr_mod": 1.05},
    "khobar":           {"cpm_mod": 1.1,  "cvr_mod": 1.05},
    "makkah":           {"cpm_mod": 1.0,  "cvr_mod": 1.0},
    "madinah":          {"cpm_mod": 0.95, "cvr_mod": 0.98},
    "taif":             {"cpm_mod": 0.9,  "cvr_mod": 0.95},
    "buraidah":         {"cpm_mod": 0.85, "cvr_mod": 0.9},
    "tabuk":            {"cpm_mod": 0.85, "cvr_mod": 0.9},
    "khamis_mushait":   {"cpm_mod": 0.8,  "cvr_mod": 0.85},
    "hail":             {"cpm_mod": 0.8,  "cvr_mod": 0.85},
    "najran":           {"cpm_mod": 0.75, "cvr_mod": 0.8},
    "jubail":           {"cpm_mod": 0.9,  "cvr_mod": 0.95},
    "yanbu":            {"cpm_mod": 0.85, "cvr_mod": 0.9},
    "abha":             {"cpm_mod": 0.8,  "cvr_mod": 0.85},
    "qatif":            {"cpm_mod": 0.85, "cvr_mod": 0.9},
    "al_ahsa":          {"cpm_mod": 0.85, "cvr_mod": 0.9},
    "other_cities":     {"cpm_mod": 0.85, "cvr_mod": 0.9},
    "all_major_cities": {"cpm_mod": 1.05, "cvr_mod": 1.02},
}

DEVICES = {
    "mobile":  {"ctr_mod": 1.2,  "cvr_mod": 0.9},
    "desktop": {"ctr_mod": 0.8,  "cvr_mod": 1.2},
    "tablet":  {"ctr_mod": 1.0,  "cvr_mod": 1.0},
    "all":     {"ctr_mod": 1.05, "cvr_mod": 1.05},
}

INTERESTS = {
    "fashion_shopping":       {"cpm": 1.05, "ctr": 1.15, "cvr": 1.10},
    "electronics":            {"cpm": 1.10, "ctr": 1.05, "cvr": 1.08},
    "luxury_goods":           {"cpm": 1.30, "ctr": 1.15, "cvr": 1.25},
    "discounts_offers":       {"cpm": 0.90, "ctr": 1.25, "cvr": 1.15},
    "health_fitness":         {"cpm": 1.05, "ctr": 1.10, "cvr": 1.08},
    "beauty_cosmetics":       {"cpm": 1.10, "ctr": 1.20, "cvr": 1.15},
    "finance_investment":     {"cpm": 1.25, "ctr": 0.95, "cvr": 1.20},
    "real_estate_investment": {"cpm": 1.35, "ctr": 1.05, "cvr": 1.30},
    "travel_tourism":         {"cpm": 1.15, "ctr": 1.10, "cvr": 1.12},
    "education_learning":     {"cpm": 1.05, "ctr": 1.05, "cvr": 1.10},
}

BEHAVIORS = {
    "online_shoppers":     {"cpm": 1.10, "ctr": 1.08, "cvr": 1.20},
    "engaged_shoppers":    {"cpm": 1.15, "ctr": 1.15, "cvr": 1.25},
    "luxury_brand_buyers": {"cpm": 1.40, "ctr": 1.10, "cvr": 1.35},
    "coupon_users":        {"cpm": 0.95, "ctr": 1.20, "cvr": 1.15},
    "seasonal_shoppers":   {"cpm": 1.00, "ctr": 1.10, "cvr": 1.12},
    "ad_engagers":         {"cpm": 1.00, "ctr": 1.20, "cvr": 1.05},
    "mobile_gamers":       {"cpm": 0.95, "ctr": 1.15, "cvr": 0.90},
    "tech_early_adopters": {"cpm": 1.25, "ctr": 1.15, "cvr": 1.20},
    "frequent_travelers":  {"cpm": 1.20, "ctr": 1.08, "cvr": 1.15},
    "property_seekers":    {"cpm": 1.40, "ctr": 1.20, "cvr": 1.40},
}

INDUSTRY_SPLITS = {
    "default": {
        "platform_split": {"meta": 0.40, "google_ads": 0.30, "tiktok": 0.10, "snapchat": 0.10, "youtube": 0.10},
        "min_platforms": 2, "max_platforms": 5, "recommended_platforms": ["meta", "google_ads"],
    },
    "e_commerce": {
        "platform_split": {"meta": 0.32, "google_ads": 0.28, "tiktok": 0.22, "snapchat": 0.12, "youtube": 0.06},
        "min_platforms": 3, "max_platforms": 6, "recommended_platforms": ["meta", "google_ads", "tiktok"],
    },
    "real_estate": {
        "platform_split": {"google_ads": 0.45, "meta": 0.30, "snapchat": 0.15, "x": 0.10},
        "min_platforms": 2, "max_platforms": 4, "recommended_platforms": ["google_ads", "meta"],
    },
    "financial_services": {
        "platform_split": {"linkedin": 0.42, "google_ads": 0.35, "x": 0.15, "meta": 0.08},
        "min_platforms": 2, "max_platforms": 4, "recommended_platforms": ["linkedin", "google_ads"],
    },
    "tech_saas": {
        "platform_split": {"linkedin": 0.38, "google_ads": 0.32, "x": 0.15, "meta": 0.10, "youtube": 0.05},
        "min_platforms": 2, "max_platforms": 5, "recommended_platforms": ["linkedin", "google_ads"],
    },
    "education": {
        "platform_split": {"google_ads": 0.35, "meta": 0.30, "linkedin": 0.25, "youtube": 0.10},
        "min_platforms": 2, "max_platforms": 4, "recommended_platforms": ["google_ads", "meta", "linkedin"],
    },
    "tourism_hospitality": {
        "platform_split": {"meta": 0.32, "google_ads": 0.28, "youtube": 0.20, "tiktok": 0.12, "snapchat": 0.08},
        "min_platforms": 3, "max_platforms": 5, "recommended_platforms": ["meta", "google_ads", "youtube"],
    },
    "automotive": {
        "platform_split": {"youtube": 0.35, "google_ads": 0.32, "meta": 0.28, "snapchat": 0.05},
        "min_platforms": 2, "max_platforms": 4, "recommended_platforms": ["youtube", "google_ads", "meta"],
    },
    "restaurants_cafes": {
        "platform_split": {"tiktok": 0.30, "snapchat": 0.25, "meta": 0.30, "google_ads": 0.15},
        "min_platforms": 3, "max_platforms": 4, "recommended_platforms": ["tiktok", "snapchat", "meta"],
    },
    "healthcare": {
        "platform_split": {"google_ads": 0.45, "meta": 0.35, "snapchat": 0.10, "youtube": 0.10},
        "min_platforms": 2, "max_platforms": 4, "recommended_platforms": ["google_ads", "meta"],
    },
    "retail": {
        "platform_split": {"meta": 0.38, "snapchat": 0.22, "tiktok": 0.18, "google_ads": 0.15, "programmatic": 0.07},
        "min_platforms": 3, "max_platforms": 5, "recommended_platforms": ["meta", "snapchat", "tiktok"],
    },
    "events": {
        "platform_split": {"linkedin": 0.38, "meta": 0.28, "google_ads": 0.20, "x": 0.10, "youtube": 0.04},
        "min_platforms": 2, "max_platforms": 5, "recommended_platforms": ["linkedin", "meta", "google_ads"],
    },
    "apps_tech": {
        "platform_split": {"meta": 0.35, "google_ads": 0.30, "tiktok": 0.20, "linkedin": 0.10, "youtube": 0.05},
        "min_platforms": 3, "max_platforms": 5, "recommended_platforms": ["meta", "google_ads", "tiktok"],
    },
    "fashion": {
        "platform_split": {"tiktok": 0.35, "meta": 0.30, "snapchat": 0.20, "google_ads": 0.15},
        "min_platforms": 3, "max_platforms": 4, "recommended_platforms": ["tiktok", "meta", "snapchat"],
    },
    "sports_fitness": {
        "platform_split": {"tiktok": 0.40, "meta": 0.30, "google_ads": 0.20, "youtube": 0.10},
        "min_platforms": 3, "max_platforms": 4, "recommended_platforms": ["tiktok", "meta"],
    },
}

GOAL_WEIGHTS = {
    "awareness":         {"meta": 1.15, "tiktok": 1.25, "youtube": 1.20, "snapchat": 1.10,
                          "google_ads": 0.85, "linkedin": 0.70, "x": 0.80, "programmatic": 0.90},
    "traffic":           {"google_ads": 1.25, "meta": 1.10, "linkedin": 1.05, "tiktok": 0.95,
                          "youtube": 0.90, "snapchat": 0.85, "x": 0.80, "programmatic": 1.0},
    "leads":             {"google_ads": 1.30, "linkedin": 1.25, "meta": 1.15, "x": 1.05,
                          "youtube": 0.95, "tiktok": 0.85, "snapchat": 0.80, "programmatic": 0.90},
    "sales":             {"meta": 1.20, "google_ads": 1.15, "tiktok": 1.05, "snapchat": 1.0,
                          "youtube": 0.95, "linkedin": 0.90, "x": 0.85, "programmatic": 1.10},
    "engagement":        {"tiktok": 1.30, "snapchat": 1.20, "meta": 1.15, "youtube": 1.10,
                          "x": 1.05, "google_ads": 0.80, "linkedin": 0.85, "programmatic": 0.90},
    "brand_recognition": {"youtube": 1.25, "meta": 1.15, "tiktok": 1.20, "google_ads": 0.90,
                          "linkedin": 1.0, "snapchat": 1.05, "x": 0.95, "programmatic": 0.85},
    "retargeting":       {"meta": 1.35, "google_ads": 1.25, "programmatic": 1.20, "linkedin": 1.10,
                          "tiktok": 0.90, "snapchat": 0.85, "youtube": 0.95, "x": 0.80},
}

PLATFORM_FLOORS = {
    "meta": 2000,
    "google_ads": 3000,
    "tiktok": 1500,
    "snapchat": 1500,
    "linkedin": 8000,
    "youtube": 5000,
    "x": 3000,
    "programmatic": 5000,
}

DEFAULT_PLATFORM_FLOOR = 1000

INDUSTRY_MIN_BUDGETS = {
    "real_estate": 50000,
    "default": 5000,
}

_ALL_PLATFORMS = ["meta", "google_ads", "tiktok", "snapchat", "youtube", "x", "linkedin", "programmatic"]

PLATFORM_COMPATIBILITY = {
    "e_commerce":          {"allow": ["meta", "google_ads", "tiktok", "snapchat", "youtube"],
                            "discourage": ["linkedin"], "optimal": ["meta", "google_ads", "tiktok"]},
    "real_estate":         {"allow": ["google_ads", "meta", "snapchat", "x"],
                            "discourage": ["tiktok"], "optimal": ["google_ads", "meta"]},
    "automotive":          {"allow": ["youtube", "google_ads", "meta", "snapchat"],
                            "discourage": ["linkedin", "x", "programmatic"], "optimal": ["youtube", "google_ads", "meta"]},
    "restaurants_cafes":   {"allow": ["tiktok", "snapchat", "meta", "google_ads", "youtube"],
                            "discourage": ["linkedin", "x", "programmatic"], "optimal": ["tiktok", "snapchat", "meta"]},
    "healthcare":          {"allow": ["google_ads", "meta", "snapchat", "youtube"],
                            "discourage": ["tiktok", "x", "programmatic"], "optimal": ["google_ads", "meta"]},
    "education":           {"allow": ["google_ads", "meta", "linkedin", "youtube"],
                            "discourage": ["tiktok", "snapchat", "x"], "optimal": ["google_ads", "meta", "linkedin"]},
    "tourism_hospitality": {"allow": ["youtube", "meta", "google_ads", "tiktok", "snapchat"],
                            "discourage": ["linkedin", "x", "programmatic"], "optimal": ["meta", "google_ads", "youtube"]},
    "financial_services":  {"allow": ["linkedin", "google_ads", "x", "meta"],
                            "discourage": ["tiktok", "snapchat"], "optimal": ["linkedin", "google_ads"]},
    "tech_saas":           {"allow": ["linkedin", "google_ads", "x", "meta", "youtube"],
                            "discourage": ["snapchat"], "optimal": ["linkedin", "google_ads"]},
    "retail":              {"allow": ["meta", "snapchat", "tiktok", "google_ads", "programmatic", "youtube"],
                            "discourage": ["linkedin", "x"], "optimal": ["meta", "snapchat", "tiktok"]},
    "events":              {"allow": ["linkedin", "meta", "google_ads", "x", "youtube"],
                            "discourage": ["snapchat", "tiktok"], "optimal": ["linkedin", "meta", "google_ads"]},
    "default":             {"allow": _ALL_PLATFORMS, "discourage": [], "optimal": ["meta", "google_ads"]},
}

COMPETITOR_SPLITS = {
    "e_commerce":         {"meta": 0.35, "google_ads": 0.30, "tiktok": 0.20, "snapchat": 0.15},
    "real_estate":        {"google_ads": 0.50, "meta": 0.30, "snapchat": 0.20},
    "financial_services": {"linkedin": 0.50, "google_ads": 0.40, "x": 0.10},
    "events":             {"linkedin": 0.40, "meta": 0.30, "google_ads": 0.20, "x": 0.10},
}

# minimum spend the planner recommends on a key platform per industry;
# "required" also flags the platform when it is absent from the plan
INDUSTRY_ADVISORIES = {
    "e_commerce":         [{"platform": "meta", "min_budget": 5000, "required": False}],
    "real_estate":        [{"platform": "google_ads", "min_budget": 8000, "required": False}],
    "financial_services": [{"platform": "linkedin", "min_budget": 10000, "required": True}],
}

# plausible ranges used by the guardrail rules
VALIDATION_RANGES = {
    "industries": {
        "default": {
            "roas": {"min": 1.5, "max": 8.0, "optimal": 3.5},
            "arpu": {"min": 50, "max": 1000, "optimal": 200},
            "ctr": {"min": 0.5, "max": 5.0, "optimal": 1.5},
            "cvr": {"min": 0.5, "max": 10.0, "optimal": 2.5},
            "cpm": {"min": 2.0, "max": 15.0, "optimal": 6.0},
        },
        "e_commerce": {
            "roas": {"min": 2.8, "max": 7.5, "optimal": 4.2},
            "arpu": {"min": 200, "max": 800, "optimal": 380},
            "ctr": {"min": 1.0, "max": 3.5, "optimal": 1.8},
            "cvr": {"min": 1.2, "max": 4.5, "optimal": 2.8},
            "cpm": {"min": 3.0, "max": 8.0, "optimal": 5.0},
        },
        "real_estate": {
            "roas": {"min": 2.2, "max": 18.0, "optimal": 8.5},
            "arpu": {"min": 8000, "max": 35000, "optimal": 15000},
            "ctr": {"min": 1.2, "max": 4.5, "optimal": 2.2},
            "cvr": {"min": 0.6, "max": 6.0, "optimal": 2.5},
            "cpm": {"min": 5.0, "max": 20.0, "optimal": 10.0},
        },
        "financial_services": {
            "roas": {"min": 2.2, "max": 12.0, "optimal": 5.5},
            "arpu": {"min": 1500, "max": 15000, "optimal": 5000},
            "ctr": {"min": 0.8, "max": 4.0, "optimal": 1.8},
            "cvr": {"min": 1.8, "max": 7.5, "optimal": 3.5},
            "cpm": {"min": 8.0, "max": 25.0, "optimal": 15.0},
        },
        "tech_saas": {
            "roas": {"min": 2.0, "max": 8.5, "optimal": 4.0},
            "arpu": {"min": 1500, "max": 18000, "optimal": 6000},
            "ctr": {"min": 0.7, "max": 3.2, "optimal": 1.5},
            "cvr": {"min": 1.5, "max": 6.0, "optimal": 3.0},
            "cpm": {"min": 6.0, "max": 18.0, "optimal": 12.0},
        },
        "education": {
            "roas": {"min": 2.8, "max": 10.0, "optimal": 5.5},
            "arpu": {"min": 2000, "max": 12000, "optimal": 5000},
            "ctr": {"min": 1.0, "max": 3.8, "optimal": 2.0},
            "cvr": {"min": 2.2, "max": 9.5, "optimal": 4.5},
            "cpm": {"min": 4.0, "max": 12.0, "optimal": 7.5},
        },
        "tourism_hospitality": {
            "roas": {"min": 3.2, "max": 10.5, "optimal": 6.0},
            "arpu": {"min": 600, "max": 3500, "optimal": 1200},
            "ctr": {"min": 1.2, "max": 4.0, "optimal": 2.2},
            "cvr": {"min": 2.0, "max": 6.5, "optimal": 3.8},
            "cpm": {"min": 3.5, "max": 10.0, "optimal": 6.5},
        },
        "automotive": {
            "roas": {"min": 2.5, "max": 12.0, "optimal": 6.0},
            "arpu": {"min": 3000, "max": 25000, "optimal": 8000},
            "ctr": {"min": 1.0, "max": 4.0, "optimal": 2.0},
            "cvr": {"min": 1.0, "max": 5.5, "optimal": 2.8},
            "cpm": {"min": 6.0, "max": 18.0, "optimal": 12.0},
        },
        "restaurants_cafes": {
            "roas": {"min": 3.5, "max": 9.5, "optimal": 6.0},
            "arpu": {"min": 100, "max": 350, "optimal": 180},
            "ctr": {"min": 1.5, "max": 5.0, "optimal": 2.8},
            "cvr": {"min": 2.5, "max": 8.5, "optimal": 4.5},
            "cpm": {"min": 2.5, "max": 8.0, "optimal": 4.5},
        },
        "healthcare": {
            "roas": {"min": 2.2, "max": 8.5, "optimal": 4.5},
            "arpu": {"min": 400, "max": 1800, "optimal": 800},
            "ctr": {"min": 1.2, "max": 4.2, "optimal": 2.0},
            "cvr": {"min": 1.8, "max": 7.0, "optimal": 3.5},
            "cpm": {"min": 5.0, "max": 15.0, "optimal": 9.0},
        },
        "retail": {
            "roas": {"min": 3.2, "max": 8.5, "optimal": 5.5},
            "arpu": {"min": 220, "max": 900, "optimal": 400},
            "ctr": {"min": 1.2, "max": 3.8, "optimal": 2.0},
            "cvr": {"min": 1.8, "max": 5.5, "optimal": 3.2},
            "cpm": {"min": 3.0, "max": 8.5, "optimal": 5.5},
        },
        "events": {
            "roas": {"min": 2.0, "max": 7.5, "optimal": 4.0},
            "arpu": {"min": 400, "max": 3000, "optimal": 1200},
            "ctr": {"min": 0.8, "max": 3.5, "optimal": 1.8},
            "cvr": {"min": 1.2, "max": 6.5, "optimal": 3.0},
            "cpm": {"min": 6.0, "max": 20.0, "optimal": 12.0},
        },
    },
    "platforms": {
        "meta":       {"cpm": {"min": 2.5, "max": 8.0, "optimal": 4.5},
                       "ctr": {"min": 0.8, "max": 2.5, "optimal": 1.6},
                       "cvr": {"min": 2.0, "max": 5.0, "optimal": 3.5}},
        "google_ads": {"cpm": {"min": 3.0, "max": 10.0, "optimal": 6.0},
                       "ctr": {"min": 1.5, "max": 3.5, "optimal": 2.5},
                       "cvr": {"min": 2.5, "max": 6.0, "optimal": 4.2}},
        "tiktok":     {"cpm": {"min": 2.0, "max": 7.0, "optimal": 4.0},
                       "ctr": {"min": 1.0, "max": 2.8, "optimal": 1.8},
                       "cvr": {"min": 1.2, "max": 3.5, "optimal": 2.5}},
        "linkedin":   {"cpm": {"min": 15.0, "max": 35.0, "optimal": 25.0},
                       "ctr": {"min": 0.3, "max": 1.2, "optimal": 0.7},
                       "cvr": {"min": 2.5, "max": 6.0, "optimal": 4.2}},
    },
    "rules": {
        "max_roas_threshold": 15.0,
        "min_roas_threshold": 1.0,
        "flag_threshold_percentage": 30,
    },
}

DEFAULT_BENCHMARKS = {
    "platforms": PLATFORMS,
    "industries": INDUSTRIES,
    "seasons": SEASONS,
    "default_season_insight": DEFAULT_SEASON_INSIGHT,
    "season_conflicts": SEASON_CONFLICTS,
    "creatives": CREATIVES,
    "competition": COMPETITION,
    "demographics": DEMOGRAPHICS,
    "locations": LOCATIONS,
    "devices": DEVICES,
    "interests": INTERESTS,
    "behaviors": BEHAVIORS,
    "industry_splits": INDUSTRY_SPLITS,
    "goal_weights": GOAL_WEIGHTS,
    "platform_floors": PLATFORM_FLOORS,
    "default_platform_floor": DEFAULT_PLATFORM_FLOOR,
    "industry_min_budgets": INDUSTRY_MIN_BUDGETS,
    "platform_compatibility": PLATFORM_COMPATIBILITY,
    "competitor_splits": COMPETITOR_SPLITS,
    "industry_advisories": INDUSTRY_ADVISORIES,
    "validation_ranges": VALIDATION_RANGES,
}
