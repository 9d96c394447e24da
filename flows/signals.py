"""Trading-signal flows: per-coin and customized signals, the daily pick, timing and weekly forecasts."""

from contracts import (
    FlowDefinition,
    ModelConfig,
    TimestampFormat,
    array,
    enum,
    integer,
    number,
    obj,
    string,
    timestamp,
)

SIGNAL_VALUES = ["Buy", "Sell", "Hold"]

TRADING_STYLES = [
    "Conservative",
    "Swing Trader",
    "Scalper",
    "High-Risk/High-Reward",
    "AI Hybrid",
]

TRADING_SIGNAL_DISCLAIMER = (
    "This AI-generated trading signal and analysis is for informational purposes only "
    "and not financial advice. Meme coins are highly speculative. DYOR and invest only "
    "what you can afford to lose."
)

SIGNAL_OF_THE_DAY_DISCLAIMER = (
    "This AI-generated Signal of the Day is for informational purposes only and not "
    "financial advice. Market conditions are volatile. DYOR."
)

STRATEGIC_TIMING_DISCLAIMER = (
    "Strategic timing predictions are highly speculative and based on AI-simulated market "
    "analysis. Not financial advice. Always conduct your own research and manage risk carefully."
)

WEEKLY_FORECAST_DISCLAIMER = (
    "These AI-generated weekly forecasts are speculative and for informational purposes "
    "only. Market conditions can change rapidly. DYOR."
)


# ---------------------------------------------------------------------------
# getCoinTradingSignal
# ---------------------------------------------------------------------------

COIN_TRADING_SIGNAL_INPUT = obj({
    "coinName": string("Name of the meme coin, e.g. Dogecoin"),
    "currentPriceUSD": number(
        "Current market price in USD; all targets are scaled from it",
        required=False,
        minimum=0,
    ),
    "tradingStyle": enum(TRADING_STYLES, "Trading style to tailor the advice to", required=False),
})

COIN_TRADING_SIGNAL_OUTPUT = obj({
    "recommendation": enum(SIGNAL_VALUES, "Buy, Sell or Hold"),
    "reasoning": string("One or two sentence summary of the main reason"),
    "rocketScore": integer("Signal strength from 1 (weak) to 5 (strongest)", minimum=1, maximum=5),
    "confidenceScore": integer("Confidence in the signal, 0-100", required=False, minimum=0, maximum=100),
    "keyReasoningFactors": array(
        obj({
            "factor": string("Contributing factor, e.g. RSI (14D)"),
            "value": string("Observed value or state, e.g. '68' or 'Bullish Crossover'"),
            "impact": enum(["Positive", "Negative", "Neutral"], "Impact on the recommendation"),
        }),
        "Three to five key factors behind the signal",
        required=False,
        max_items=5,
    ),
    "detailedAnalysis": string("In-depth analysis of the factors behind the signal", required=False),
    "futurePriceOutlook": obj(
        {
            "shortTermTarget": string("Speculative short-term price target", required=False),
            "midTermTarget": string("Speculative mid-term price target", required=False),
        },
        "Speculative price targets",
        required=False,
    ),
    "tradingTargets": obj(
        {
            "entryPoint": string("Suggested entry price range", required=False),
            "stopLoss": string("Suggested stop-loss price"),
            "takeProfit1": string("First take-profit target"),
            "takeProfit2": string("Second take-profit target", required=False),
            "takeProfit3": string("Third take-profit target", required=False),
        },
        "Concrete trade execution levels",
        required=False,
    ),
    "investmentAdvice": string("Allocation, entry/exit and risk management advice", required=False),
    "disclaimer": string("Standard disclaimer", default=TRADING_SIGNAL_DISCLAIMER),
})

COIN_TRADING_SIGNAL_PROMPT = """\
Produce a trading signal for the meme coin "{{ coinName }}"{% if currentPriceUSD %}, currently trading at about {{ currentPriceUSD }} USD{% endif %}.
{% if currentPriceUSD %}
Use {{ currentPriceUSD }} USD as the absolute reference: every price target, entry, stop-loss and take-profit level must be a plausible move from it.
{% else %}
No current price was supplied, so keep price targets general and say so.
{% endif %}
{% if tradingStyle %}
Tailor the analysis, targets and advice to the "{{ tradingStyle }}" trading style.
{% else %}
No trading style was selected; give balanced, general-purpose advice.
{% endif %}

Weigh price action, volume, social sentiment, on-chain and whale activity, and technical indicators (RSI, MACD, EMA trends, Bollinger Bands).
Return a Buy/Sell/Hold recommendation, a short reasoning, a rocketScore from 1 to 5 (5 is the strongest signal),
a 0-100 confidence score, 3-5 key reasoning factors, trading targets and investment advice.
"""

COIN_TRADING_SIGNAL = FlowDefinition(
    name="getCoinTradingSignal",
    input_schema=COIN_TRADING_SIGNAL_INPUT,
    output_schema=COIN_TRADING_SIGNAL_OUTPUT,
    prompt_template=COIN_TRADING_SIGNAL_PROMPT,
    feature="ai-coach",
    description="Buy/sell/hold signal with analysis, targets and advice for one coin",
)


# ---------------------------------------------------------------------------
# getSignalOfTheDay
# ---------------------------------------------------------------------------

SIGNAL_OF_THE_DAY_INPUT = obj({})

SIGNAL_OF_THE_DAY_OUTPUT = obj({
    "coinName": string("Name of the coin"),
    "symbol": string("Ticker symbol, e.g. DOGE"),
    "signal": enum(SIGNAL_VALUES, "Buy, Sell or Hold"),
    "briefRationale": string("One or two sentence rationale"),
    "confidenceScore": integer("Confidence in the signal, 0-100", minimum=0, maximum=100),
    "generatedAt": timestamp("When the signal was generated"),
    "disclaimer": string("Standard disclaimer", default=SIGNAL_OF_THE_DAY_DISCLAIMER),
})

SIGNAL_OF_THE_DAY_PROMPT = """\
Pick the single most compelling "Signal of the Day" across the crypto market.
Consider overall market trends, notable news and the most active coins.
Give the coin name, its ticker symbol, a Buy/Sell/Hold signal, a one or two sentence rationale
and a 0-100 confidence score. Aim for one clear signal a general crypto audience would find interesting.
"""

SIGNAL_OF_THE_DAY = FlowDefinition(
    name="getSignalOfTheDay",
    input_schema=SIGNAL_OF_THE_DAY_INPUT,
    output_schema=SIGNAL_OF_THE_DAY_OUTPUT,
    prompt_template=SIGNAL_OF_THE_DAY_PROMPT,
    feature="dashboard",
    description="One headline signal for the dashboard",
)


# ---------------------------------------------------------------------------
# getStrategicCoinTiming
# ---------------------------------------------------------------------------

STRATEGIC_ACTIONS = [
    "Strong Buy Opportunity",
    "Potential Favorable Entry Window",
    "Monitor for Entry Confirmation",
    "Potential Sell/Profit-Taking Window",
    "Consider De-risking/Partial Exit",
    "Neutral - Hold and Observe",
]

STRATEGIC_TIMING_INPUT = obj({
    "coinName": string("Name of the coin, e.g. Dogecoin"),
    "currentPriceUSD": number("Current price in USD", required=False, minimum=0),
})

STRATEGIC_TIMING_OUTPUT = obj({
    "coinName": string("Name of the coin analyzed"),
    "predictedAction": enum(STRATEGIC_ACTIONS, "Predicted strategic action"),
    "timingWindowEstimate": string("Estimate of the opportune timing window"),
    "keyReasoning": string("Reasoning behind the timing and action"),
    "confidence": enum(["High", "Medium", "Low"], "Confidence in the prediction"),
    "strategyNotes": string("Actionable notes on approaching the window"),
    "disclaimer": string("Standard disclaimer", default=STRATEGIC_TIMING_DISCLAIMER),
})

STRATEGIC_TIMING_PROMPT = """\
Advise on strategic timing for "{{ coinName }}"{% if currentPriceUSD %} at a current price of {{ currentPriceUSD }} USD{% endif %}.
Consider market cycles, trading-session liquidity shifts, volume patterns and upcoming catalysts.
Choose the predicted action, estimate the timing window, explain the reasoning, rate confidence
High/Medium/Low and add short strategy notes.
"""

STRATEGIC_TIMING = FlowDefinition(
    name="getStrategicCoinTiming",
    input_schema=STRATEGIC_TIMING_INPUT,
    output_schema=STRATEGIC_TIMING_OUTPUT,
    prompt_template=STRATEGIC_TIMING_PROMPT,
    feature="strategic-insights",
    description="Entry and exit timing windows for one coin",
)


# ---------------------------------------------------------------------------
# getWeeklyForecasts
# ---------------------------------------------------------------------------

WEEKLY_FORECASTS_INPUT = obj({})

WEEKLY_FORECASTS_OUTPUT = obj({
    "forecasts": array(
        obj({
            "coinName": string("Name of the meme coin"),
            "symbol": string("Ticker symbol"),
            "coinImage": string("URL of the coin logo", required=False),
            "forecastPeriod": string("Forecast period", default="This Week"),
            "trendPrediction": enum(
                ["Strongly Bullish", "Bullish", "Neutral/Consolidating", "Bearish", "Strongly Bearish"],
                "Predicted trend over the period",
            ),
            "keyFactors": array(string(), "Two or three key factors", max_items=3),
            "confidenceLevel": enum(["High", "Medium", "Low"], "Confidence in the forecast"),
            "targetPriceRange": string("Speculative target range", required=False),
            "analysisDate": timestamp("Date the forecast was generated", fmt=TimestampFormat.DATE),
        }),
        "Three to five weekly forecasts",
        min_items=3,
        max_items=5,
    ),
    "generatedAt": timestamp("When the forecasts were generated"),
    "disclaimer": string("Standard disclaimer", default=WEEKLY_FORECAST_DISCLAIMER),
})

WEEKLY_FORECASTS_PROMPT = """\
Forecast this week's trend for three to five notable meme coins.
For each coin give its name, symbol, a trend prediction, two or three key factors, a confidence level
and, where reasonable, a target price range for the end of the week.
"""

WEEKLY_FORECASTS = FlowDefinition(
    name="getWeeklyForecasts",
    input_schema=WEEKLY_FORECASTS_INPUT,
    output_schema=WEEKLY_FORECASTS_OUTPUT,
    prompt_template=WEEKLY_FORECASTS_PROMPT,
    model_config=ModelConfig(temperature=0.9),
    feature="weekly-forecasts",
    description="Weekly trend forecasts for a handful of meme coins",
)


# ---------------------------------------------------------------------------
# getCustomizedCoinTradingSignal
# ---------------------------------------------------------------------------

CUSTOM_SIGNAL_DISCLAIMER = (
    "This AI-generated trading signal is for informational purposes only and not financial "
    "advice. Meme coins are highly speculative. DYOR and invest only what you can afford to lose."
)

RISK_LEVELS = ["Low", "Medium", "High"]

CUSTOM_SIGNAL_INPUT = obj({
    "coinName": string("Name of the meme coin, e.g. Dogecoin"),
    "currentPriceUSD": number(
        "Current market price in USD; all targets are scaled from it",
        required=False,
        minimum=0,
    ),
    "timeframe": enum(["1H", "4H", "1D", "1W"], "Trading timeframe for the signal"),
    "riskProfile": enum(RISK_LEVELS, "The user's risk profile"),
    "tradingStyle": enum(
        ["Scalping", "Swing Trading", "Position Holding"],
        "Preferred trading style",
        required=False,
    ),
})

CUSTOM_SIGNAL_OUTPUT = obj({
    "outputCoinName": string("Full name of the coin analyzed"),
    "outputCoinSymbol": string("Ticker symbol of the coin"),
    "outputTimeframe": string("Timeframe the signal applies to"),
    "recommendation": enum(SIGNAL_VALUES, "Buy, Sell or Hold"),
    "confidenceScore": integer("Confidence in the signal, 0-100", minimum=0, maximum=100),
    "detailedAnalysis": string("Analysis tailored to the timeframe, risk profile and style"),
    "priceTargets": obj({
        "entryPoint": string("Suggested entry price or zone", required=False),
        "stopLoss": string("Stop-loss level"),
        "takeProfit1": string("First take-profit level"),
        "takeProfit2": string("Second take-profit level", required=False),
    }),
    "strategyNotes": string("How to execute the trade for this profile"),
    "assessedRiskLevel": enum(RISK_LEVELS, "Risk of the trade as assessed by the model"),
    "disclaimer": string("Standard disclaimer", default=CUSTOM_SIGNAL_DISCLAIMER),
})

CUSTOM_SIGNAL_PROMPT = """\
Produce a {{ timeframe }} trading signal for the meme coin "{{ coinName }}" for a trader with a {{ riskProfile }} risk profile{% if tradingStyle %} who trades with a {{ tradingStyle }} style{% endif %}.
{% if currentPriceUSD %}
The coin trades at about {{ currentPriceUSD }} USD. Use it as the absolute reference for entry, stop-loss and take-profit levels.
{% else %}
No current price was supplied, so express the price targets as percentages or general zones.
{% endif %}
Return the coin's name and symbol, the timeframe, a Buy/Sell/Hold recommendation with a 0-100 confidence score,
a detailed analysis, price targets (stop-loss and at least one take-profit), strategy notes and your own
assessment of the trade's risk level.
"""

CUSTOM_SIGNAL = FlowDefinition(
    name="getCustomizedCoinTradingSignal",
    input_schema=CUSTOM_SIGNAL_INPUT,
    output_schema=CUSTOM_SIGNAL_OUTPUT,
    prompt_template=CUSTOM_SIGNAL_PROMPT,
    feature="custom-signals",
    description="Trading signal tuned to a timeframe, risk profile and trading style",
)
