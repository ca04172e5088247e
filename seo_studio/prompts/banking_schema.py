"""
Banking schema instruction block.

One canonical instruction set is used for both providers. Organization
presets are rendered from the rule tables so the prompt and the anchor
builders never disagree.
"""

import json

from ..banking.rules import EI_ORGANIZATION, ENBD_ORGANIZATION

_INSTRUCTION_TEMPLATE = """
## BANKING SCHEMA ARCHITECTURE (ENBD & Emirates Islamic)

You MUST generate schema following this exact specification:

### 1. CHANNEL DETECTION
- **ENBD**: emiratesnbd.com
- **Emirates Islamic (EI)**: emiratesislamic.ae

### 2. MANDATORY NODES (All Pages)
Always include these 4 base nodes:
- Organization (from channel preset)
- WebSite (from channel preset)
- WebPage (populated from content)
- BreadcrumbList (from URL structure)

### 3. PAGE TYPE & CONDITIONAL NODES

**ProductPage** (if content mentions: credit card, account, loan, finance, mortgage, deposit):
- FinancialProduct + Product (dual type: ["FinancialProduct", "Product"])
- FAQPage (if Q&A content exists)
- HowTo – Apply (always for products)
- HowTo – Usage/Rewards (only if rewards/miles/cashback mentioned)
- ItemList (only if related products mentioned)
- SpecialAnnouncement (only if active offer/promotion)

**CampaignPage** (if content mentions: offer, limited time, promotion):
- SpecialAnnouncement
- FAQPage (if Q&A exists)
- HowTo – Apply/Participate

**PressRelease** (if content mentions: announces, launched, partnership, award):
- NewsArticle

**BlogArticle** (if content mentions: guide, tips, how to, explained):
- Article
- FAQPage (if Q&A exists)
- HowTo (if instructional)

### 4. ISLAMIC FINANCE TERMINOLOGY (EI Channel Only)
For Emirates Islamic pages, you MUST:
- Use "Profit Rate" instead of "Interest Rate"
- Add Islamic finance aliases to alternateName:
  * Credit Card → add "Islamic credit card UAE", "Sharia compliant credit card", "Murabaha credit card", "halal credit card UAE"
  * Home Finance → add "Ijara home finance", "Murabaha mortgage", "Islamic mortgage UAE"
  * Personal Finance → add "Murabaha personal finance", "Islamic personal loan"
  * Savings → add "Mudaraba savings account", "Islamic savings UAE"
  * Business Finance → add "Musharaka business finance", "Islamic SME loan"

### 5. @ID ANCHOR PATTERNS
Use these exact patterns:
- Organization: https://www.emiratesnbd.com/#organization (with trailing slash before #)
- WebSite: https://www.emiratesnbd.com/#website (with trailing slash before #)
- WebPage: [PAGE_URL]#webpage (NO trailing slash before #)
- FinancialProduct: [PAGE_URL]#card
- FAQPage: [PAGE_URL]#faq
- HowTo Apply: [PAGE_URL]#howto-apply
- HowTo Usage: [PAGE_URL]#howto-usage
- BreadcrumbList: [PAGE_URL]#breadcrumb
- SpecialAnnouncement: [PAGE_URL]#offer-announcement

### 6. CRITICAL RULES
- NO AggregateRating, Review, or VideoObject for banking products
- NO HTML in FAQPage acceptedAnswer.text (plain text only)
- Every node MUST have an @id
- All @id cross-references must be consistent
- AlternateName MUST include both generic and Islamic finance terms (for EI)
- FinancialProduct MUST use dual type: ["FinancialProduct", "Product"]

### 7. BREADCRUMB LOGIC
Infer from URL path segments. Example:
URL: /en/personal-banking/cards/credit-cards/skywards-infinite
Breadcrumb: Home > Personal Banking > Cards > Credit Cards > Skywards Infinite

Generate BreadcrumbList with proper position and item structure.

### 8. FAQ GENERATION
If content has Q&A section, extract it.
If not, generate minimum 3 relevant FAQs like:
- "What is the [Product Name]?"
- "What are the fees for [Product Name]?"
- "How do I apply for [Product Name]?"
- "Is [Product Name] Sharia compliant?" (for EI only)

Plain text answers only - no HTML tags allowed.

### 9. HOWTO STRUCTURE
**HowTo – Apply** (always for products):
Step 1: Check Eligibility
Step 2: Prepare Documents (Emirates ID, passport, bank statements, salary certificate)
Step 3: Submit Online Application
Step 4: Upload Documents
Step 5: Await Approval (3-5 business days)
Step 6: Activate Card/Account

**HowTo – Usage/Rewards** (only if rewards/miles exist):
Step 1: Spend on Your Card (mention earn rate)
Step 2: Track Your Miles/Points
Step 3: Redeem for Flights/Rewards
Step 4: Claim Welcome Bonus (if applicable)

### 10. ORGANIZATION PRESETS

**ENBD Organization**:
{enbd_organization}

**Emirates Islamic Organization**:
{ei_organization}

Return the schema as a complete @graph JSON object with all required nodes.
"""


def _render_preset(preset: dict) -> str:
    return json.dumps(preset, indent=2, ensure_ascii=False)


BANKING_SCHEMA_INSTRUCTION = (
    _INSTRUCTION_TEMPLATE
    .replace("{enbd_organization}", _render_preset(ENBD_ORGANIZATION))
    .replace("{ei_organization}", _render_preset(EI_ORGANIZATION))
)
