'''
Financial valuation and scoring engine.

This package turns historical financial statements and a live quote into
a deterministic DCF intrinsic value, ROIC metrics, balance sheet red flags
and a weighted 0-100 investment score. Every engine component is a pure
function over frozen records.

Usage:
  from moneytalks.analysis.analyzer import analyze
  from moneytalks.config.settings import EngineConfig
  from moneytalks.data.mock import mock_quote, mock_statements

  result = analyze(
      mock_quote('GRMN'),
      mock_statements('GRMN'),
      config=EngineConfig.default(),
  )
  print(result.score.verdict.value, result.dcf_result.intrinsic_value)
'''
