"""Market-wide scanning flows: anomalies, alpha ideas, pre-launch gems, on-chain scoring, buzz and narratives."""

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

ANOMALY_DISCLAIMER = (
    "Anomaly detection is AI-simulated based on general market patterns and not real-time, "
    "exhaustive data analysis. Interpret with caution."
)

ALPHA_FEED_DISCLAIMER = (
    "These AI-generated trade ideas are for informational and educational purposes only, "
    "and do not constitute financial advice. Trading cryptocurrencies is highly speculative "
    "and involves substantial risk of loss. DYOR."
)

PRE_LAUNCH_DISCLAIMER = (
    "Pre-launch gem hunting is EXTREMELY HIGH RISK. These AI-generated insights are highly "
    "speculative and based on simulated data. Most pre-launch projects fail, are scams, or "
    "have no value. DYOR extensively."
)

ONCHAIN_CAVEAT = (
    "OCIS and related metrics are AI-simulated based on general on-chain principles and do "
    "not reflect real-time, exhaustive on-chain analysis. DYOR."
)


# ---------------------------------------------------------------------------
# detectMarketAnomalies
# ---------------------------------------------------------------------------

ANOMALY_TYPES = [
    "Unusual Price Movement",
    "High Trading Volume",
    "Social Sentiment Spike",
    "Liquidity Event",
    "Security Alert",
    "Whale Activity Spike",
]

MARKET_ANOMALIES_INPUT = obj({
    "marketSegment": string("Segment to scan, e.g. 'Meme Coins' or 'DeFi Tokens'"),
})

MARKET_ANOMALIES_OUTPUT = obj({
    "anomalies": array(
        obj({
            "coinName": string("Coin showing the anomaly"),
            "symbol": string("Ticker symbol"),
            "anomalyType": enum(ANOMALY_TYPES, "Kind of anomaly"),
            "description": string("What was detected and what it may imply"),
            "severity": enum(["Critical", "High", "Medium", "Low"], "Assessed severity"),
            "timestamp": string("When the anomaly became significant, e.g. '2 hours ago'"),
            "confidence": number("Detection confidence, 0.0-1.0", minimum=0, maximum=1),
            "volumeChangePercentage": number("Volume increase in percent", required=False),
        }),
        "Detected anomalies",
    ),
    "summary": string("Overall summary of the scan"),
    "lastScanned": timestamp("When the scan was performed"),
    "dataDisclaimer": string("Caveat about the data", default=ANOMALY_DISCLAIMER),
})

MARKET_ANOMALIES_PROMPT = """\
Scan the "{{ marketSegment }}" segment for market anomalies: unusual price moves, volume surges,
sentiment spikes, liquidity events, security alerts and whale activity.
For each anomaly give the coin, symbol, type, description, severity, a relative time and a 0.0-1.0 confidence;
include the volume change percentage for volume anomalies. Finish with a short summary of the scan.
"""

MARKET_ANOMALIES = FlowDefinition(
    name="detectMarketAnomalies",
    input_schema=MARKET_ANOMALIES_INPUT,
    output_schema=MARKET_ANOMALIES_OUTPUT,
    prompt_template=MARKET_ANOMALIES_PROMPT,
    model_config=ModelConfig(temperature=0.4),
    feature="market-anomalies",
    description="Flags unusual activity within a market segment",
)


# ---------------------------------------------------------------------------
# getAlphaFeedIdeas
# ---------------------------------------------------------------------------

IDEA_TYPES = [
    "High Potential Upside",
    "Narrative Play",
    "Contrarian Bet",
    "Short-Term Momentum",
    "Undervalued Gem",
    "Ecosystem Growth",
]

RISK_REWARD_PROFILES = [
    "High Risk / High Reward",
    "Medium Risk / Medium Reward",
    "Low Risk / Calculated Reward",
    "Speculative / Asymmetric Upside",
]

ALPHA_FEED_INPUT = obj({
    "filter": string("Optional focus, e.g. 'meme coins' or 'DeFi'", required=False),
})

ALPHA_FEED_OUTPUT = obj({
    "feedItems": array(
        obj({
            "coinName": string("Coin or token name"),
            "symbol": string("Ticker symbol"),
            "ideaType": enum(IDEA_TYPES, "Category of the idea"),
            "signal": enum(["Buy", "Accumulate", "Watch", "Consider Short"], "Suggested action"),
            "riskRewardProfile": enum(RISK_REWARD_PROFILES, "Risk versus reward"),
            "marketConditionContext": string("Relevant overall market conditions"),
            "narrativeTimingContext": string("Why the timing may be opportune"),
            "rationale": string("Why this is an alpha idea"),
            "confidenceScore": integer("Confidence, 0-100", minimum=0, maximum=100),
            "suggestedTimeframe": string("Holding or monitoring timeframe"),
            "keyMetricsToWatch": array(string(), "Metrics that confirm or invalidate the idea", required=False),
        }),
        "Trade ideas",
    ),
    "lastGenerated": timestamp("When the feed was generated"),
    "disclaimer": string("Standard disclaimer", default=ALPHA_FEED_DISCLAIMER),
})

ALPHA_FEED_PROMPT = """\
Generate a feed of actionable crypto trade ideas{% if filter %} focused on {{ filter }}{% endif %}.
For each idea give the coin, symbol, idea type, signal, risk/reward profile, market and narrative timing context,
a rationale with catalysts, a 0-100 confidence score, a suggested timeframe and the metrics to watch.
"""

ALPHA_FEED = FlowDefinition(
    name="getAlphaFeedIdeas",
    input_schema=ALPHA_FEED_INPUT,
    output_schema=ALPHA_FEED_OUTPUT,
    prompt_template=ALPHA_FEED_PROMPT,
    model_config=ModelConfig(temperature=0.9),
    feature="alpha-feed",
    description="A feed of speculative trade ideas",
)


# ---------------------------------------------------------------------------
# getPreLaunchGems
# ---------------------------------------------------------------------------

PRE_LAUNCH_GEMS_INPUT = obj({})

PRE_LAUNCH_GEMS_OUTPUT = obj({
    "gems": array(
        obj({
            "gemName": string("Name or codename of the project"),
            "potentialListingPlatform": string("Rumored listing platform", required=False),
            "estimatedLaunchWindow": string("Speculative launch timeframe"),
            "simulatedBuzzSummary": string("Summary of chatter across social channels"),
            "keyIndicators": array(string(), "Key indicators for the gem", max_items=5),
            "moonPotentialScore": integer("Perceived upside, 0-100", minimum=0, maximum=100),
            "degenScore": integer("Risk and speculative fervor, 0-100", minimum=0, maximum=100),
            "developerReputationHint": string("Hint about the team", required=False),
            "chain": string("Expected blockchain", required=False),
        }),
        "Three to five potential pre-launch gems",
    ),
    "lastScanned": timestamp("When the scan was performed"),
    "disclaimer": string("Standard disclaimer", default=PRE_LAUNCH_DISCLAIMER),
})

PRE_LAUNCH_GEMS_PROMPT = """\
Identify three to five potential pre-launch or very early-stage meme coin projects.
For each, give the name, rumored listing platform, launch window, a summary of the social buzz,
two to four key indicators, a 0-100 moon potential score, a 0-100 degen score, a developer reputation hint and the chain.
"""

PRE_LAUNCH_GEMS = FlowDefinition(
    name="getPreLaunchGems",
    input_schema=PRE_LAUNCH_GEMS_INPUT,
    output_schema=PRE_LAUNCH_GEMS_OUTPUT,
    prompt_template=PRE_LAUNCH_GEMS_PROMPT,
    model_config=ModelConfig(temperature=1.0),
    feature="pre-launch-radar",
    description="Highly speculative radar of not-yet-launched projects",
)


# ---------------------------------------------------------------------------
# getOnChainIntelligence
# ---------------------------------------------------------------------------

ONCHAIN_INTELLIGENCE_INPUT = obj({
    "coinName": string("Coin to analyze, e.g. Dogecoin"),
})

ONCHAIN_INTELLIGENCE_OUTPUT = obj({
    "coinName": string("Coin analyzed"),
    "ocisScore": integer("On-Chain Intelligence Score, 0-100", minimum=0, maximum=100),
    "ocisInterpretation": string("What the OCIS score implies"),
    "whaleMomentumIndex": integer("Net whale buying (+) or selling (-), -100 to 100", minimum=-100, maximum=100),
    "wmiInterpretation": string("Interpretation of the whale momentum index"),
    "smartWalletAccumulationScore": integer("Smart-money accumulation, 0-100", minimum=0, maximum=100),
    "swasInterpretation": string("Interpretation of the accumulation score"),
    "contractAuditInsights": obj({
        "riskLevel": enum(["Low", "Medium", "High", "Critical", "Not Applicable"], "Contract risk level"),
        "summary": string("Summary of the simulated audit"),
        "lastSimulatedAudit": timestamp("When the audit assessment was made"),
    }),
    "dataCaveat": string("Caveat about simulated metrics", default=ONCHAIN_CAVEAT),
})

ONCHAIN_INTELLIGENCE_PROMPT = """\
Score the on-chain intelligence of "{{ coinName }}".
Give an overall 0-100 OCIS score, a whale momentum index from -100 to 100, a 0-100 smart wallet accumulation score,
an interpretation of each, and a smart contract audit assessment with a risk level and summary.
"""

ONCHAIN_INTELLIGENCE = FlowDefinition(
    name="getOnChainIntelligence",
    input_schema=ONCHAIN_INTELLIGENCE_INPUT,
    output_schema=ONCHAIN_INTELLIGENCE_OUTPUT,
    prompt_template=ONCHAIN_INTELLIGENCE_PROMPT,
    feature="onchain-intelligence",
    description="Whale, smart-money and contract health scoring for one coin",
)


# ---------------------------------------------------------------------------
# getAggregatedCoinBuzz
# ---------------------------------------------------------------------------

BUZZ_SOURCES_NOTE = (
    "Insights are AI-synthesized based on simulated scanning of public news and social media "
    "data, not direct real-time feeds."
)

BUZZ_DISCLAIMER = (
    "This AI-generated buzz aggregation is for informational purposes only and not financial "
    "advice. DYOR."
)

COIN_BUZZ_INPUT = obj({
    "coinName": string("Coin to aggregate news and social buzz for"),
})

COIN_BUZZ_OUTPUT = obj({
    "coinName": string("Coin analyzed"),
    "analysisDate": timestamp("Date of the analysis", fmt=TimestampFormat.DATE),
    "keyNewsHighlights": array(string(), "Notable recent news items"),
    "socialMediaThemes": array(string(), "Recurring themes on social media"),
    "overallBuzzSentiment": enum(
        ["Very Positive", "Positive", "Neutral", "Negative", "Very Negative", "Mixed"],
        "Overall sentiment of the buzz",
    ),
    "buzzScore": integer("Buzz score from -100 (very negative) to 100 (very positive)", minimum=-100, maximum=100),
    "emergingNarratives": array(string(), "Narratives starting to form around the coin"),
    "significantEventsMentioned": array(string(), "Listings, partnerships, upgrades and similar events"),
    "dataSourcesNote": string("Where the insights come from", default=BUZZ_SOURCES_NOTE),
    "disclaimer": string("Standard disclaimer", default=BUZZ_DISCLAIMER),
})

COIN_BUZZ_PROMPT = """\
Aggregate the current news and social media buzz around "{{ coinName }}".
Summarize the key news highlights and the recurring social media themes, rate the overall sentiment,
give a buzz score from -100 to 100, and list emerging narratives and significant events that are being mentioned.
"""

COIN_BUZZ = FlowDefinition(
    name="getAggregatedCoinBuzz",
    input_schema=COIN_BUZZ_INPUT,
    output_schema=COIN_BUZZ_OUTPUT,
    prompt_template=COIN_BUZZ_PROMPT,
    feature="news-buzz",
    description="News and social media buzz summary for one coin",
)


# ---------------------------------------------------------------------------
# getMarketNarratives
# ---------------------------------------------------------------------------

NARRATIVES_DISCLAIMER = (
    "Narrative detection is AI-simulated based on general market understanding and does not "
    "constitute financial advice. Narratives can shift rapidly."
)

MARKET_NARRATIVES_INPUT = obj({
    "topic": string("Topic, market segment or coin, e.g. 'Solana Ecosystem'"),
})

MARKET_NARRATIVES_OUTPUT = obj({
    "analyzedTopic": string("Topic the narratives were detected for"),
    "detectedNarratives": array(
        obj({
            "narrative": string("Short statement of the narrative"),
            "strength": enum(["Strong", "Growing", "Fading", "Speculative"], "How established it is"),
            "sentiment": enum(["Positive", "Negative", "Neutral", "Mixed"], "Sentiment it carries"),
            "potentialImpact": string("Likely effect on prices or attention"),
            "keyEvidenceSnippets": array(string(), "Up to three supporting snippets", max_items=3),
        }),
        "Narratives currently driving the topic",
    ),
    "overallMarketPsychology": string("The market mood behind the narratives"),
    "confidence": enum(["High", "Medium", "Low"], "Confidence in the detection"),
    "analysisDate": timestamp("Date of the analysis", fmt=TimestampFormat.DATE),
    "disclaimer": string("Standard disclaimer", default=NARRATIVES_DISCLAIMER),
})

MARKET_NARRATIVES_PROMPT = """\
Detect the market narratives currently shaping "{{ topic }}".
For each narrative give its strength, sentiment, potential impact and up to three short evidence snippets.
Then describe the overall market psychology and state how confident you are in the analysis.
"""

MARKET_NARRATIVES = FlowDefinition(
    name="getMarketNarratives",
    input_schema=MARKET_NARRATIVES_INPUT,
    output_schema=MARKET_NARRATIVES_OUTPUT,
    prompt_template=MARKET_NARRATIVES_PROMPT,
    feature="narrative-engine",
    description="Narratives, their strength and the market psychology around a topic",
)
