"""
Phrase tables for the negotiation engine.

WHAT: Trigger keywords the classifier looks for and the reply templates it emits
WHY: Keyword matching is the engine's only view of intent; keeping the tables
     in one place lets tests enumerate every trigger
HOW: Plain tuples of lowercase keywords and str.format templates

Templates use these fields: {offer} {anchor} {asking} {counter} {target}
{firm} {condition} {notes} {description} {title}. Dollar amounts are passed
already formatted (e.g. "$120").
"""

# ---------- Classifier triggers (matched against the last seller message, lowercased) ----------

ACCEPT_KEYWORDS = ("deal", "works for me", "you got it")

REJECT_KEYWORDS = ("low for me", "can't accept that", "can't go that low")

FIRM_KEYWORDS = ("best price is", "lowest is", "can't go lower", "firm")

COUNTER_KEYWORDS = ("how about", "could you do", "meet me at")

# ---------- Seller-side triggers (matched against the last buyer message) ----------

AVAILABILITY_KEYWORDS = ("available",)

CONDITION_KEYWORDS = ("condition", "scratches", "issues")

# ---------- Seller reply templates ----------

SELLER_ACCEPT = (
    "Perfect, {offer_number} works for me. Let's meet at the mall entrance around 6 PM. "
    "Here's my number (555-123-4567) to coordinate.",
    "You got it. {offer} is a deal. We can meet at the Starbucks on Oak Street. "
    "Let me know what time is good for you.",
    "Deal! Let's arrange a meetup. I'm free this afternoon. The public library downtown is a good spot.",
    "Awesome, it's a deal at {offer}. Can you meet at the Target parking lot today? "
    "You can text me at (555) 123-4567 when you're on your way.",
)

SELLER_AVAILABLE = (
    "Yep, still available! Asking {asking}, but open to reasonable offers.",
    "Hi there! Yes, it's still available. My price is {asking}.",
    "It is! Happy to answer any questions. Asking {asking}.",
)

SELLER_TOO_LOW = (
    "Sorry, that's a bit too low for me, especially since I'm already at {anchor}.",
    "I appreciate the offer, but I can't go that low.",
    "Unfortunately, that's too far from what I'm looking for. My price is {anchor}.",
)

SELLER_FIRM = (
    "I'm firm at {anchor}. That's my best price.",
    "Sorry, can't go any lower than {anchor} for now.",
)

SELLER_COUNTER = (
    "Thanks for the offer, but that's a little low. Could you meet me at {counter}?",
    "We're getting closer! How about we settle at {counter}?",
    "I can't do {offer}, but I could do {counter} for a quick pickup.",
)

SELLER_PUSH_FOR_ANCHOR = (
    "We are so close. My absolute lowest is {anchor}. Can you make that work?",
    "I appreciate that. If you can do {anchor}, it's all yours.",
    "I was really hoping for {anchor}. Let's stick with that and we have a deal.",
)

SELLER_CONDITION = (
    "It's in '{condition}' condition, as mentioned in the listing. {notes_or_default}",
    "Good question. It's in great shape. {description}",
    "It's held up really well. {notes_or_shrug}",
)

SELLER_CONDITION_NOTES_DEFAULT = "No major issues to report from my end."
SELLER_CONDITION_NOTES_SHRUG = "I haven't noticed any major problems myself."

SELLER_OPEN_TO_OFFERS = (
    "I'm open to reasonable offers.",
    "Let me know if you have a price in mind!",
    "What were you thinking for price?",
    "My asking price is {asking}, let me know what you think.",
)

# ---------- Buyer coaching ----------

BUYER_ACCEPTED_ADVICE = (
    "You've got a deal! Now's the time to confirm the meetup details. "
    "Always choose a safe, public location."
)
BUYER_ACCEPTED_SUGGESTIONS = (
    "Great! That time works for me.",
    "Perfect, see you there!",
    "Sounds good, I'll text you when I'm on my way.",
    "Excellent! Looking forward to it.",
)

BUYER_STALLED_ADVICE = (
    "The negotiation has stalled. The seller rejected your last offers. You could try one "
    "final offer close to their last price, or it might be time to walk away."
)
BUYER_STALLED_SUGGESTIONS = (
    "I understand. My best and final offer is {target}.",
    "Okay, thanks for considering. I think I'll have to pass for now.",
    "What is the absolute lowest you would take today?",
)

BUYER_FIRM_ADVICE = (
    "The seller is holding firm at {firm}. This is likely their final offer. "
    "You can accept, or politely walk away if it's too high for you."
)
BUYER_FIRM_SUGGESTIONS = (
    "Okay, I can do {firm}. Let's arrange pickup.",
    "I understand. That's a bit more than I was hoping to spend. I'll have to think about it.",
    "Thanks for letting me know. I'll pass for now, but good luck with the sale!",
)

BUYER_COUNTERED_ADVICE = (
    "The seller countered with {counter}. This is a great sign! They're willing to negotiate. "
    "Try offering a bit lower to seal the deal."
)
BUYER_COUNTERED_SUGGESTIONS = (
    "Thanks for being flexible. Would you take {target} if I can pick it up today?",
    "How about we meet in the middle at {target}?",
    "I can do that. Is {counter} your final price?",
    "Okay, let's do {counter}. When are you free to meet?",
)

BUYER_REJECTED_ADVICE = (
    "Your last offer was rejected. Try a more conservative bid around {target} to show "
    "you're a serious buyer, or ask what they'd be comfortable with."
)
BUYER_REJECTED_SUGGESTIONS = (
    "My apologies if that was too low. Would you consider {target}?",
    "I understand. What's the lowest you'd be willing to go?",
    "No problem. Is the price negotiable at all?",
    "Okay, what price would you be happy with?",
)

BUYER_OPENING_ADVICE = (
    "Start the negotiation. An opening offer around {target} is reasonable for an item in "
    "'{condition}' condition and often gets the conversation started."
)
BUYER_OPENING_SUGGESTIONS = (
    "Would you take {target} cash?",
    "What's the condition like in person? Any scratches I should know about?",
    "I'm very interested. Is the price flexible?",
    "Could you do {target}? I can pick it up this afternoon.",
)

# ---------- Conversation scaffolding ----------

BUYER_OPENER = "Hi, I saw your listing for the {title}. Is it still available?"

SELLER_FALLBACK_REPLY = "Thanks for your message! I'll get back to you soon."


def contains_any(text: str, keywords) -> bool:
    """True when any keyword appears in the (already lowercased) text."""
    return any(keyword in text for keyword in keywords)
