"""Per-coin analysis flows: sentiment, price trend, whale movements and price prediction."""

from contracts import FlowDefinition, array, enum, number, obj, string

PRICE_TREND_DISCLAIMER = (
    "This AI-generated price trend analysis is speculative and not financial advice. "
    "Market conditions can change rapidly."
)

WHALE_CAVEAT = (
    "This analysis describes general patterns of whale activity and is not based on real-time "
    "tracking of specific whale wallets. Actual whale movements require specialized on-chain "
    "analysis tools."
)

FUTURE_PRICE_DISCLAIMER = (
    "Future price predictions are highly speculative and not financial advice. Market conditions "
    "for meme coins can change extremely rapidly. Always conduct your own research (DYOR)."
)

COIN_INPUT = obj({
    "coinName": string("Name of the meme coin, e.g. Dogecoin"),
})


# ---------------------------------------------------------------------------
# analyzeMemeCoinSentiment
# ---------------------------------------------------------------------------

SENTIMENT_OUTPUT = obj({
    "overallSentiment": string("Overall sentiment, e.g. Bullish, Bearish or Neutral"),
    "sentimentScore": number("Sentiment from -1 (very negative) to 1 (very positive)", minimum=-1, maximum=1),
    "sentimentBreakdown": string("How sentiment splits across news, social media and forums"),
    "keyDiscussionPoints": string("What people are talking about"),
    "emergingThemes": array(string(), "Themes gaining traction"),
    "influencerMentions": array(
        obj({
            "name": string("Influencer name or handle"),
            "platform": string("Where the mention was made"),
            "sentiment": string("Sentiment of the mention"),
            "summary": string("What was said"),
            "linkToMention": string("Link to the mention", required=False),
        }),
        "Notable influencer mentions",
    ),
})

SENTIMENT_PROMPT = """\
Analyze the market sentiment around the meme coin "{{ coinName }}" across news, social media and community forums.
Give the overall sentiment with a score from -1 to 1, a breakdown by source, the key discussion points,
emerging themes and notable influencer mentions.
"""

SENTIMENT = FlowDefinition(
    name="analyzeMemeCoinSentiment",
    input_schema=COIN_INPUT,
    output_schema=SENTIMENT_OUTPUT,
    prompt_template=SENTIMENT_PROMPT,
    feature="analysis",
    description="Sentiment score, themes and influencer mentions for one coin",
)


# ---------------------------------------------------------------------------
# getPriceTrendAnalysis
# ---------------------------------------------------------------------------

PRICE_TREND_OUTPUT = obj({
    "currentTrendOutlook": string("Short-term trend outlook"),
    "keyDrivingFactors": array(string(), "Factors driving the trend"),
    "potentialScenarios": string("Bullish and bearish scenarios"),
    "supportResistanceLevels": string("Key support and resistance levels", required=False),
    "confidence": string("Confidence in the analysis"),
    "disclaimer": string("Standard disclaimer", default=PRICE_TREND_DISCLAIMER),
})

PRICE_TREND_PROMPT = """\
Analyze the short-term price trend of the meme coin "{{ coinName }}".
Describe the current outlook, the key factors driving it and the plausible bullish and bearish scenarios.
Mention support and resistance levels where you can, and say how confident you are.
"""

PRICE_TREND = FlowDefinition(
    name="getPriceTrendAnalysis",
    input_schema=COIN_INPUT,
    output_schema=PRICE_TREND_OUTPUT,
    prompt_template=PRICE_TREND_PROMPT,
    feature="analysis",
    description="Trend outlook, drivers and scenarios for one coin",
)


# ---------------------------------------------------------------------------
# getWhaleMovementAnalysis
# ---------------------------------------------------------------------------

WHALE_MOVEMENT_OUTPUT = obj({
    "activitySummary": string("Typical whale activity around the coin"),
    "potentialImpact": string("How that activity can move the price"),
    "detectionIndicators": array(string(), "Signs that whales are accumulating or distributing"),
    "dataCaveat": string("Caveat about the data behind the analysis", default=WHALE_CAVEAT),
})

WHALE_MOVEMENT_PROMPT = """\
Describe the whale activity patterns relevant to the meme coin "{{ coinName }}".
Summarize the activity, explain its potential impact on price and list indicators a trader can watch to detect it.
"""

WHALE_MOVEMENT = FlowDefinition(
    name="getWhaleMovementAnalysis",
    input_schema=COIN_INPUT,
    output_schema=WHALE_MOVEMENT_OUTPUT,
    prompt_template=WHALE_MOVEMENT_PROMPT,
    feature="analysis",
    description="Whale activity patterns and their likely price impact",
)


# ---------------------------------------------------------------------------
# getFuturePricePrediction
# ---------------------------------------------------------------------------

FUTURE_PRICE_INPUT = obj({
    "coinName": string("Name of the meme coin, e.g. Dogecoin"),
    "currentPriceUSD": number("Current price in USD, if known", required=False, minimum=0),
})

FUTURE_PRICE_OUTPUT = obj({
    "coinName": string("Coin the prediction is for"),
    "predictions": array(
        obj({
            "timeframe": string("Horizon, e.g. '1 Week'"),
            "predictedPrice": string("Predicted price or range"),
        }),
        "Price predictions per horizon",
    ),
    "confidenceLevel": enum(["High", "Medium", "Low"], "Confidence in the predictions"),
    "reasoning": string("What the predictions are based on"),
    "disclaimer": string("Standard disclaimer", default=FUTURE_PRICE_DISCLAIMER),
})

FUTURE_PRICE_PROMPT = """\
Predict the future price of the meme coin "{{ coinName }}" over several horizons, such as one week, one month and three months.
{% if currentPriceUSD %}
The coin currently trades at about {{ currentPriceUSD }} USD; every prediction must be a plausible move from that price.
{% endif %}
Give a predicted price or range per horizon, an overall confidence level and the reasoning behind the predictions.
"""

FUTURE_PRICE = FlowDefinition(
    name="getFuturePricePrediction",
    input_schema=FUTURE_PRICE_INPUT,
    output_schema=FUTURE_PRICE_OUTPUT,
    prompt_template=FUTURE_PRICE_PROMPT,
    feature="analysis",
    description="Price predictions over several horizons for one coin",
)
