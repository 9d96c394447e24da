"""Tests for the flow catalog, run end to end with a stubbed model."""

from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import MagicMock

from config import Settings
from contracts import Tier
from engine import FlowExecutor, InvalidInput, MalformedResponse, PromptRenderer, ResponseNormalizer
from flows import ALL_FLOWS, build_registry
from flows.analysis import WHALE_CAVEAT
from flows.market import BUZZ_DISCLAIMER, BUZZ_SOURCES_NOTE
from flows.signals import CUSTOM_SIGNAL_DISCLAIMER, SIGNAL_OF_THE_DAY_DISCLAIMER, TRADING_SIGNAL_DISCLAIMER
from flows.tools import COMPARISON_DISCLAIMER, ROI_DISCLAIMER
from gating import TierGate
from providers import ModelInvoker


SAMPLE_INPUTS = {
    "getCoinTradingSignal": {"coinName": "Dogecoin", "currentPriceUSD": 0.16, "tradingStyle": "Scalper"},
    "getSignalOfTheDay": {},
    "getCoinAdvice": {"coinName": "PEPE", "question": "Is it too late to buy?", "currentPriceUSD": 0.00001},
    "detectMarketAnomalies": {"marketSegment": "Meme Coins"},
    "setupSmartAlert": {"coinName": "Dogecoin", "metric": "Price", "condition": "exceeds", "targetValue": 0.25},
    "getAlphaFeedIdeas": {"filter": "Solana memes"},
    "getPreLaunchGems": {},
    "getOnChainIntelligence": {"coinName": "Shiba Inu"},
    "getStrategicCoinTiming": {"coinName": "Bonk"},
    "getWeeklyForecasts": {},
    "getCustomizedCoinTradingSignal": {
        "coinName": "Dogecoin",
        "currentPriceUSD": 0.16,
        "timeframe": "4H",
        "riskProfile": "High",
        "tradingStyle": "Swing Trading",
    },
    "getAggregatedCoinBuzz": {"coinName": "Pepe"},
    "getMarketNarratives": {"topic": "Solana Ecosystem"},
    "analyzeMemeCoinSentiment": {"coinName": "Dogecoin"},
    "getPriceTrendAnalysis": {"coinName": "Shiba Inu"},
    "getWhaleMovementAnalysis": {"coinName": "Bonk"},
    "getFuturePricePrediction": {"coinName": "Floki", "currentPriceUSD": 0.0002},
    "predictMemeCoinRoi": {"coinName": "Bonk", "investmentAmount": 500, "predictionHorizon": "1 month"},
    "compareMemeCoins": {"coin1Name": "Dogecoin", "coin2Name": "Shiba Inu"},
    "getPredictionConfidenceInsights": {"coinName": "Pepe", "predictionType": "7-day Price Trend"},
}


@pytest.fixture
def invoker():
    return MagicMock(spec=ModelInvoker)


@pytest.fixture
def executor(invoker):
    return FlowExecutor(build_registry(), invoker, gate=TierGate(), config=Settings())


class TestCatalog:

    def test_registry_holds_every_flow(self):
        registry = build_registry()
        assert len(registry) == len(ALL_FLOWS) == 20
        assert set(registry.names()) == set(SAMPLE_INPUTS)

    def test_registries_are_independent(self):
        assert build_registry() is not build_registry()

    def test_every_feature_has_access_rule(self):
        TierGate().validate_features(d.feature for d in ALL_FLOWS if d.feature)

    @pytest.mark.parametrize("definition", ALL_FLOWS, ids=lambda d: d.name)
    def test_prompt_renders(self, definition):
        validated = ResponseNormalizer().normalize(SAMPLE_INPUTS[definition.name], definition.input_schema)
        text = PromptRenderer().render(definition.prompt_template, validated)
        assert text.strip()
        for value in SAMPLE_INPUTS[definition.name].values():
            if isinstance(value, str):
                assert value in text

    def test_trading_signal_prompt_without_optionals(self):
        definition = build_registry().lookup("getCoinTradingSignal")
        text = PromptRenderer().render(definition.prompt_template, {"coinName": "Dogecoin"})
        assert "Dogecoin" in text
        assert "USD as the absolute reference" not in text
        assert "No trading style was selected" in text

    def test_gated_flows_by_tier(self):
        gate = TierGate()
        premium_only = {d.name for d in ALL_FLOWS if gate.required_tier(d.feature) == Tier.PREMIUM}
        assert premium_only == {
            "getCoinTradingSignal",
            "setupSmartAlert",
            "getPreLaunchGems",
            "getStrategicCoinTiming",
        }


class TestCoinTradingSignal:

    def test_minimal_reply_backfills_disclaimer(self, executor, invoker):
        invoker.invoke.return_value = {"recommendation": "Buy", "reasoning": "Volume surge", "rocketScore": 4}
        output = executor.execute("getCoinTradingSignal", {"coinName": "Dogecoin"}, tier=Tier.PREMIUM)
        assert output == {
            "recommendation": "Buy",
            "reasoning": "Volume surge",
            "rocketScore": 4,
            "disclaimer": TRADING_SIGNAL_DISCLAIMER,
        }

    def test_rocket_score_out_of_range(self, executor, invoker):
        invoker.invoke.return_value = {"recommendation": "Buy", "reasoning": "Volume surge", "rocketScore": 7}
        with pytest.raises(MalformedResponse) as exc:
            executor.execute("getCoinTradingSignal", {"coinName": "Dogecoin"}, tier=Tier.PREMIUM)
        assert exc.value.error.field == "rocketScore"

    def test_missing_coin_name(self, executor, invoker):
        with pytest.raises(InvalidInput):
            executor.execute("getCoinTradingSignal", {}, tier=Tier.PREMIUM)
        invoker.invoke.assert_not_called()

    def test_full_reply(self, executor, invoker):
        reply = {
            "recommendation": "Hold",
            "reasoning": "Consolidating after a run",
            "rocketScore": 3,
            "confidenceScore": 65,
            "keyReasoningFactors": [
                {"factor": "RSI (14D)", "value": "68", "impact": "Neutral"},
                {"factor": "Whale activity", "value": "Accumulating", "impact": "Positive"},
            ],
            "tradingTargets": {"stopLoss": "$0.14", "takeProfit1": "$0.18"},
            "disclaimer": "Custom disclaimer",
        }
        invoker.invoke.return_value = reply
        assert executor.execute("getCoinTradingSignal", {"coinName": "Dogecoin"}, tier=Tier.PREMIUM) == reply

    def test_nested_target_missing(self, executor, invoker):
        invoker.invoke.return_value = {
            "recommendation": "Buy",
            "reasoning": "r",
            "rocketScore": 4,
            "tradingTargets": {"stopLoss": "$0.14"},
        }
        with pytest.raises(MalformedResponse) as exc:
            executor.execute("getCoinTradingSignal", {"coinName": "Dogecoin"}, tier=Tier.PREMIUM)
        assert exc.value.error.field == "tradingTargets.takeProfit1"


class TestSignalOfTheDay:

    def test_generated_at_is_stamped(self, executor, invoker):
        invoker.invoke.return_value = {
            "coinName": "Dogecoin",
            "symbol": "DOGE",
            "signal": "Buy",
            "briefRationale": "Breaking out on volume",
            "confidenceScore": 72,
            "generatedAt": "2001-01-01T00:00:00Z",
        }
        output = executor.execute("getSignalOfTheDay", tier=Tier.FREE)
        stamped = datetime.strptime(output["generatedAt"], "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=timezone.utc)
        assert abs(datetime.now(timezone.utc) - stamped) < timedelta(seconds=30)
        assert output["disclaimer"] == SIGNAL_OF_THE_DAY_DISCLAIMER

    def test_lowercase_signal_rejected(self, executor, invoker):
        invoker.invoke.return_value = {
            "coinName": "Dogecoin",
            "symbol": "DOGE",
            "signal": "buy",
            "briefRationale": "r",
            "confidenceScore": 72,
        }
        with pytest.raises(MalformedResponse):
            executor.execute("getSignalOfTheDay")


class TestWeeklyForecasts:

    def _forecast(self, coin):
        return {
            "coinName": coin,
            "symbol": coin[:4].upper(),
            "trendPrediction": "Bullish",
            "keyFactors": ["Volume", "Listings"],
            "confidenceLevel": "Medium",
        }

    def test_item_defaults_and_dates(self, executor, invoker):
        invoker.invoke.return_value = {"forecasts": [self._forecast(c) for c in ("Dogecoin", "Pepe", "Bonk")]}
        output = executor.execute("getWeeklyForecasts")
        today = datetime.now(timezone.utc).date().isoformat()
        for forecast in output["forecasts"]:
            assert forecast["forecastPeriod"] == "This Week"
            assert forecast["analysisDate"] in (today, (datetime.now(timezone.utc) - timedelta(days=1)).date().isoformat())

    def test_too_few_forecasts(self, executor, invoker):
        invoker.invoke.return_value = {"forecasts": [self._forecast("Dogecoin")]}
        with pytest.raises(MalformedResponse):
            executor.execute("getWeeklyForecasts")

    def test_uses_flow_temperature(self, executor, invoker):
        invoker.invoke.return_value = {"forecasts": [self._forecast(c) for c in ("A", "B", "C")]}
        executor.execute("getWeeklyForecasts")
        assert invoker.invoke.call_args[0][2].temperature == 0.9


class TestOnChainIntelligence:

    def test_negative_whale_momentum_allowed(self, executor, invoker):
        invoker.invoke.return_value = {
            "coinName": "Shiba Inu",
            "ocisScore": 55,
            "ocisInterpretation": "Mixed",
            "whaleMomentumIndex": -40,
            "wmiInterpretation": "Whales distributing",
            "smartWalletAccumulationScore": 30,
            "swasInterpretation": "Low",
            "contractAuditInsights": {"riskLevel": "Low", "summary": "No red flags"},
        }
        output = executor.execute("getOnChainIntelligence", {"coinName": "Shiba Inu"}, tier=Tier.PRO)
        assert output["whaleMomentumIndex"] == -40
        assert "lastSimulatedAudit" in output["contractAuditInsights"]
        assert output["dataCaveat"]


class TestCustomizedTradingSignal:

    REPLY = {
        "outputCoinName": "Dogecoin",
        "outputCoinSymbol": "DOGE",
        "outputTimeframe": "4H",
        "recommendation": "Buy",
        "confidenceScore": 70,
        "detailedAnalysis": "Higher lows on the 4H chart",
        "priceTargets": {"stopLoss": "$0.15", "takeProfit1": "$0.18"},
        "strategyNotes": "Scale in over two entries",
        "assessedRiskLevel": "High",
    }

    def test_open_to_free_tier(self, executor, invoker):
        invoker.invoke.return_value = dict(self.REPLY)
        output = executor.execute(
            "getCustomizedCoinTradingSignal",
            {"coinName": "Dogecoin", "timeframe": "4H", "riskProfile": "High"},
            tier=Tier.FREE,
        )
        assert output["disclaimer"] == CUSTOM_SIGNAL_DISCLAIMER
        assert "takeProfit2" not in output["priceTargets"]

    def test_unknown_timeframe_rejected(self, executor, invoker):
        with pytest.raises(InvalidInput) as exc:
            executor.execute(
                "getCustomizedCoinTradingSignal",
                {"coinName": "Dogecoin", "timeframe": "15m", "riskProfile": "High"},
            )
        assert exc.value.error.field == "timeframe"
        invoker.invoke.assert_not_called()

    def test_prompt_without_price(self):
        definition = build_registry().lookup("getCustomizedCoinTradingSignal")
        text = PromptRenderer().render(
            definition.prompt_template,
            {"coinName": "Dogecoin", "timeframe": "1D", "riskProfile": "Low"},
        )
        assert "1D trading signal" in text
        assert "No current price was supplied" in text
        assert "style" not in text.splitlines()[0]


class TestCoinBuzz:

    def test_date_stamped_and_notes_backfilled(self, executor, invoker):
        invoker.invoke.return_value = {
            "coinName": "Pepe",
            "analysisDate": "As of October 26, 2023",
            "keyNewsHighlights": ["Listed on a new exchange"],
            "socialMediaThemes": ["Frog memes"],
            "overallBuzzSentiment": "Very Positive",
            "buzzScore": 80,
            "emergingNarratives": [],
            "significantEventsMentioned": [],
        }
        output = executor.execute("getAggregatedCoinBuzz", {"coinName": "Pepe"})
        today = datetime.now(timezone.utc).date()
        assert output["analysisDate"] in (today.isoformat(), (today - timedelta(days=1)).isoformat())
        assert output["dataSourcesNote"] == BUZZ_SOURCES_NOTE
        assert output["disclaimer"] == BUZZ_DISCLAIMER

    def test_buzz_score_bounds(self, executor, invoker):
        invoker.invoke.return_value = {
            "coinName": "Pepe",
            "keyNewsHighlights": [],
            "socialMediaThemes": [],
            "overallBuzzSentiment": "Mixed",
            "buzzScore": 150,
            "emergingNarratives": [],
            "significantEventsMentioned": [],
        }
        with pytest.raises(MalformedResponse) as exc:
            executor.execute("getAggregatedCoinBuzz", {"coinName": "Pepe"})
        assert exc.value.error.field == "buzzScore"


class TestMarketNarratives:

    def _narrative(self, snippets):
        return {
            "narrative": "Solana memes rotate into AI tokens",
            "strength": "Growing",
            "sentiment": "Positive",
            "potentialImpact": "Short-lived pumps",
            "keyEvidenceSnippets": snippets,
        }

    def test_too_many_evidence_snippets(self, executor, invoker):
        invoker.invoke.return_value = {
            "analyzedTopic": "Solana Ecosystem",
            "detectedNarratives": [self._narrative(["a", "b", "c", "d"])],
            "overallMarketPsychology": "Greedy",
            "confidence": "Medium",
        }
        with pytest.raises(MalformedResponse) as exc:
            executor.execute("getMarketNarratives", {"topic": "Solana Ecosystem"})
        assert exc.value.error.field == "detectedNarratives[0].keyEvidenceSnippets"

    def test_analysis_date_stamped(self, executor, invoker):
        invoker.invoke.return_value = {
            "analyzedTopic": "Solana Ecosystem",
            "detectedNarratives": [self._narrative(["a"])],
            "overallMarketPsychology": "Greedy",
            "confidence": "Medium",
        }
        output = executor.execute("getMarketNarratives", {"topic": "Solana Ecosystem"})
        assert len(output["analysisDate"]) == len("2025-05-16")


class TestCoinAnalysis:

    def test_sentiment_score_bounds(self, executor, invoker):
        invoker.invoke.return_value = {
            "overallSentiment": "Bullish",
            "sentimentScore": 1.5,
            "sentimentBreakdown": "Mostly positive",
            "keyDiscussionPoints": "ETF rumours",
            "emergingThemes": [],
            "influencerMentions": [],
        }
        with pytest.raises(MalformedResponse) as exc:
            executor.execute("analyzeMemeCoinSentiment", {"coinName": "Dogecoin"})
        assert exc.value.error.field == "sentimentScore"

    def test_influencer_link_optional(self, executor, invoker):
        mention = {"name": "@trader", "platform": "X", "sentiment": "Bullish", "summary": "Calls a breakout"}
        invoker.invoke.return_value = {
            "overallSentiment": "Bullish",
            "sentimentScore": 0.6,
            "sentimentBreakdown": "Mostly positive",
            "keyDiscussionPoints": "ETF rumours",
            "emergingThemes": ["ETF"],
            "influencerMentions": [mention],
        }
        output = executor.execute("analyzeMemeCoinSentiment", {"coinName": "Dogecoin"}, tier=Tier.FREE)
        assert output["influencerMentions"] == [mention]

    def test_whale_caveat_backfilled(self, executor, invoker):
        invoker.invoke.return_value = {
            "activitySummary": "Large wallets accumulate on dips",
            "potentialImpact": "Sharp moves on thin liquidity",
            "detectionIndicators": ["Exchange outflows"],
        }
        output = executor.execute("getWhaleMovementAnalysis", {"coinName": "Bonk"})
        assert output["dataCaveat"] == WHALE_CAVEAT

    def test_future_price_prompt_uses_price(self):
        definition = build_registry().lookup("getFuturePricePrediction")
        text = PromptRenderer().render(definition.prompt_template, {"coinName": "Floki", "currentPriceUSD": 0.0002})
        assert "0.0002 USD" in text


class TestTools:

    def test_roi_negative_investment_rejected(self, executor, invoker):
        with pytest.raises(InvalidInput) as exc:
            executor.execute(
                "predictMemeCoinRoi",
                {"coinName": "Bonk", "investmentAmount": -5, "predictionHorizon": "1 month"},
            )
        assert exc.value.error.field == "investmentAmount"
        invoker.invoke.assert_not_called()

    def test_roi_scenarios(self, executor, invoker):
        invoker.invoke.return_value = {
            "predictedRoi": 25.0,
            "predictedValue": 625,
            "confidenceLevel": "Low",
            "detailedReasoning": "Momentum after listing",
            "riskFactors": ["Rug pull"],
            "potentialCatalysts": ["Exchange listing"],
            "alternativeScenarios": {"optimisticRoi": 120, "pessimisticRoi": -80},
        }
        output = executor.execute(
            "predictMemeCoinRoi",
            {"coinName": "Bonk", "investmentAmount": 500, "predictionHorizon": "1 month"},
        )
        assert output["alternativeScenarios"] == {"optimisticRoi": 120, "pessimisticRoi": -80}
        assert output["disclaimer"] == ROI_DISCLAIMER

    def test_comparison(self, executor, invoker):
        invoker.invoke.return_value = {
            "comparisonTable": [{"metric": "Market Cap", "coin1Value": "$20B", "coin2Value": "$10B"}],
            "overallSummary": "Dogecoin is larger",
        }
        output = executor.execute("compareMemeCoins", {"coin1Name": "Dogecoin", "coin2Name": "Shiba Inu"})
        assert output["comparisonTable"][0] == {"metric": "Market Cap", "coin1Value": "$20B", "coin2Value": "$10B"}
        assert output["disclaimer"] == COMPARISON_DISCLAIMER

    def _confidence_reply(self, radar):
        return {
            "coinName": "Pepe",
            "predictionType": "7-day Price Trend",
            "overallConfidenceScore": 64,
            "radarChartData": radar,
            "confidenceTrend": [{"period": "Week 1", "confidence": 60}, {"period": "Week 2", "confidence": 64}],
            "predictionDriftSummary": "Slightly more confident",
            "keyFactorsInfluencingConfidence": ["Volume"],
        }

    def test_confidence_full_mark_backfilled(self, executor, invoker):
        radar = [{"subject": s, "score": 60} for s in ("Data Quality", "Volatility", "Sentiment")]
        invoker.invoke.return_value = self._confidence_reply(radar)
        output = executor.execute(
            "getPredictionConfidenceInsights",
            {"coinName": "Pepe", "predictionType": "7-day Price Trend"},
        )
        assert [point["fullMark"] for point in output["radarChartData"]] == [100, 100, 100]
        assert output["analysisTimestamp"].endswith("Z")

    def test_confidence_needs_three_radar_points(self, executor, invoker):
        radar = [{"subject": s, "score": 60} for s in ("Data Quality", "Volatility")]
        invoker.invoke.return_value = self._confidence_reply(radar)
        with pytest.raises(MalformedResponse) as exc:
            executor.execute(
                "getPredictionConfidenceInsights",
                {"coinName": "Pepe", "predictionType": "7-day Price Trend"},
            )
        assert exc.value.error.field == "radarChartData"
