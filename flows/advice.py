"""Conversational flows: free-form coin advice and smart alert setup."""

from contracts import FlowDefinition, ModelConfig, array, enum, number, obj, string, timestamp

COIN_ADVICE_DISCLAIMER = (
    "This is AI-generated advice and not financial advice. Always do your own research "
    "(DYOR) before making investment decisions."
)

SMART_ALERT_DISCLAIMER = (
    "This is a simulated alert setup and analysis. No real-time monitoring or "
    "notifications will be sent. Always DYOR."
)


# ---------------------------------------------------------------------------
# getCoinAdvice
# ---------------------------------------------------------------------------

COIN_ADVICE_INPUT = obj({
    "coinName": string("Coin the question is about, or 'general crypto'"),
    "question": string("The user's question"),
    "currentPriceUSD": number("Current price in USD, if known", required=False, minimum=0),
    "currentPriceTimestamp": string("When currentPriceUSD was observed", required=False),
})

COIN_ADVICE_OUTPUT = obj({
    "adviceDetail": string("The core answer to the question"),
    "supportingReasoning": string("Why: data points, trends and factors considered"),
    "potentialRisks": array(string(), "Key risks the user should be aware of"),
    "confidenceLevel": string("High, Medium or Low, with a justification if not High"),
    "disclaimer": string("Standard disclaimer", default=COIN_ADVICE_DISCLAIMER),
})

COIN_ADVICE_PROMPT = """\
A user asks about {{ coinName }}: "{{ question }}"
{% if currentPriceUSD %}
The current price is {{ currentPriceUSD }} USD{% if currentPriceTimestamp %} as of {{ currentPriceTimestamp }}{% endif %}. Use it where the question concerns price.
{% endif %}
Answer directly, explain the reasoning behind the answer, list the key risks and state how confident you are.
"""

COIN_ADVICE = FlowDefinition(
    name="getCoinAdvice",
    input_schema=COIN_ADVICE_INPUT,
    output_schema=COIN_ADVICE_OUTPUT,
    prompt_template=COIN_ADVICE_PROMPT,
    model_config=ModelConfig(temperature=0.5),
    feature="ai-advisor",
    description="Answers a free-form question about a coin",
)


# ---------------------------------------------------------------------------
# setupSmartAlert
# ---------------------------------------------------------------------------

ALERT_METRICS = ["Price", "MarketCap", "Volume24hChangePercent", "SocialMentions"]
ALERT_CONDITIONS = ["exceeds", "dropsBelow", "increasesByPercent", "decreasesByPercent"]

SMART_ALERT_INPUT = obj({
    "coinName": string("Coin to watch, e.g. Dogecoin"),
    "metric": enum(ALERT_METRICS, "Metric to monitor"),
    "condition": enum(ALERT_CONDITIONS, "Trigger condition"),
    "targetValue": number("Threshold value, e.g. 0.25 for price or 50 for a percentage"),
    "timeframe": string("Window for percentage conditions, e.g. 24h", required=False),
})

SMART_ALERT_OUTPUT = obj({
    "alertConfirmation": string("Human-readable confirmation of the alert"),
    "scenarioAnalysis": string("Likelihood, context and implications if the alert triggers"),
    "setupTimestamp": timestamp("When the alert setup was processed"),
    "disclaimer": string("Standard disclaimer", default=SMART_ALERT_DISCLAIMER),
})

SMART_ALERT_PROMPT = """\
Confirm a smart alert for {{ coinName }}: notify when {{ metric }} {{ condition }} {{ targetValue }}{% if timeframe %} within {{ timeframe }}{% endif %}.
Write a one-line confirmation, then analyse the scenario: how likely the condition is, relevant history
and what it would mean for the market if it triggered.
"""

SMART_ALERT = FlowDefinition(
    name="setupSmartAlert",
    input_schema=SMART_ALERT_INPUT,
    output_schema=SMART_ALERT_OUTPUT,
    prompt_template=SMART_ALERT_PROMPT,
    feature="smart-alerts",
    description="Confirms a price/metric alert and analyses its scenario",
)
