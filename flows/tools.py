"""Calculator-style tools: ROI prediction, coin comparison and prediction confidence."""

from contracts import FlowDefinition, array, integer, number, obj, string, timestamp

ROI_DISCLAIMER = (
    "ROI predictions for meme coins are highly speculative and not financial advice. Past "
    "performance is not indicative of future results. Invest only what you can afford to lose."
)

COMPARISON_DISCLAIMER = (
    "This AI-generated comparison is for informational purposes only and not financial advice. DYOR."
)

CONFIDENCE_DISCLAIMER = (
    "This confidence analysis is AI-generated and for informational purposes. It reflects the "
    "model's simulated certainty, not a guarantee of future outcomes. DYOR."
)


# ---------------------------------------------------------------------------
# predictMemeCoinRoi
# ---------------------------------------------------------------------------

ROI_INPUT = obj({
    "coinName": string("Name of the meme coin, e.g. Bonk"),
    "investmentAmount": number("Amount invested in USD", minimum=0),
    "predictionHorizon": string("Horizon for the prediction, e.g. '1 month'"),
})

ROI_OUTPUT = obj({
    "predictedRoi": number("Predicted return on investment, in percent"),
    "predictedValue": number("Predicted value of the investment in USD at the horizon"),
    "confidenceLevel": string("Confidence in the prediction"),
    "detailedReasoning": string("How the prediction was reached"),
    "riskFactors": array(string(), "Risks that could hurt the return"),
    "potentialCatalysts": array(string(), "Events that could lift the return"),
    "alternativeScenarios": obj({
        "optimisticRoi": number("ROI in percent if things go well"),
        "pessimisticRoi": number("ROI in percent if things go badly"),
    }),
    "disclaimer": string("Standard disclaimer", default=ROI_DISCLAIMER),
})

ROI_PROMPT = """\
Predict the return on a {{ investmentAmount }} USD investment in the meme coin "{{ coinName }}" over {{ predictionHorizon }}.
Give the predicted ROI in percent and the predicted value in USD, a confidence level, detailed reasoning,
the main risk factors and potential catalysts, and optimistic and pessimistic ROI scenarios.
"""

ROI_PREDICTION = FlowDefinition(
    name="predictMemeCoinRoi",
    input_schema=ROI_INPUT,
    output_schema=ROI_OUTPUT,
    prompt_template=ROI_PROMPT,
    feature="roi-calculator",
    description="Predicted ROI and scenarios for an investment amount and horizon",
)


# ---------------------------------------------------------------------------
# compareMemeCoins
# ---------------------------------------------------------------------------

COMPARISON_INPUT = obj({
    "coin1Name": string("First coin to compare"),
    "coin2Name": string("Second coin to compare"),
})

COMPARISON_OUTPUT = obj({
    "comparisonTable": array(
        obj({
            "metric": string("Metric compared, e.g. Market Cap"),
            "coin1Value": string("Value for the first coin"),
            "coin2Value": string("Value for the second coin"),
            "notes": string("Context for the comparison", required=False),
        }),
        "Metric-by-metric comparison",
    ),
    "overallSummary": string("Which coin looks stronger and why"),
    "disclaimer": string("Standard disclaimer", default=COMPARISON_DISCLAIMER),
})

COMPARISON_PROMPT = """\
Compare the meme coins "{{ coin1Name }}" and "{{ coin2Name }}".
Build a table of metrics (market cap, volume, community size, sentiment, volatility, use case and similar)
with a value for each coin and short notes, then summarize how they compare overall.
"""

COIN_COMPARISON = FlowDefinition(
    name="compareMemeCoins",
    input_schema=COMPARISON_INPUT,
    output_schema=COMPARISON_OUTPUT,
    prompt_template=COMPARISON_PROMPT,
    feature="coin-comparison",
    description="Side-by-side metric comparison of two coins",
)


# ---------------------------------------------------------------------------
# getPredictionConfidenceInsights
# ---------------------------------------------------------------------------

CONFIDENCE_INPUT = obj({
    "coinName": string("Coin the prediction concerns"),
    "predictionType": string("Kind of prediction, e.g. '7-day Price Trend'"),
})

CONFIDENCE_OUTPUT = obj({
    "coinName": string("Coin analyzed"),
    "predictionType": string("Kind of prediction analyzed"),
    "overallConfidenceScore": integer("Overall confidence, 0-100", minimum=0, maximum=100),
    "radarChartData": array(
        obj({
            "subject": string("Confidence dimension, e.g. Data Quality"),
            "score": integer("Score for the dimension, 0-100", minimum=0, maximum=100),
            "fullMark": integer("Top of the chart scale", default=100, minimum=100, maximum=100),
        }),
        "Confidence broken down by dimension",
        min_items=3,
    ),
    "confidenceTrend": array(
        obj({
            "period": string("Period label, e.g. 'Week 1'"),
            "confidence": integer("Confidence in that period, 0-100", minimum=0, maximum=100),
        }),
        "How confidence has moved over time",
        min_items=2,
    ),
    "predictionDriftSummary": string("How and why the prediction has drifted"),
    "keyFactorsInfluencingConfidence": array(string(), "Main drivers of the confidence level"),
    "analysisTimestamp": timestamp("When the analysis was generated"),
    "disclaimer": string("Standard disclaimer", default=CONFIDENCE_DISCLAIMER),
})

CONFIDENCE_PROMPT = """\
Assess how confident a "{{ predictionType }}" prediction for "{{ coinName }}" can be.
Give an overall 0-100 confidence score, at least three radar chart dimensions scored 0-100, a confidence trend
over at least two periods, a summary of how the prediction has drifted and the key factors behind the confidence level.
"""

PREDICTION_CONFIDENCE = FlowDefinition(
    name="getPredictionConfidenceInsights",
    input_schema=CONFIDENCE_INPUT,
    output_schema=CONFIDENCE_OUTPUT,
    prompt_template=CONFIDENCE_PROMPT,
    feature="confidence-dashboard",
    description="Confidence breakdown, trend and drift for one prediction",
)
