"""
Recommendation engine: ranks catalog products for a user and derives
qualitative portfolio insights.

Modules
-------
scorer       : ScoreComponents dataclass + compute_score() + build_reasons()
               Pure functions, no I/O.
ranker       : score_catalog() + recommend_products(): threshold, sort, top-N.
insights     : derive_portfolio_insights() + the per-check analyses.
descriptions : describe_product() + type_highlight(): per-type copy.
reporter     : write_recommendation_json() / _csv() + write_insights_json().
"""
