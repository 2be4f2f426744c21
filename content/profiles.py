# content/profiles.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# -------------------------------------------------------------------
# Template rendering
# -------------------------------------------------------------------
# Templates use {ROLE}, {INDUSTRY} and {PAIN}. Pain is always lower-cased.


@dataclass(frozen=True)
class TemplateContext:
    role: str
    industry: str
    pain: str


def _sentence(text: str) -> str:
    return re.sub(r"\s+", " ", text.strip())


_PLACEHOLDER_RE = re.compile(r"\{(ROLE|INDUSTRY|PAIN)\}")


def render(template: str, ctx: TemplateContext) -> str:
    # Single pass: placeholder names inside user text stay literal.
    values = {"ROLE": ctx.role, "INDUSTRY": ctx.industry, "PAIN": ctx.pain.lower()}
    return _sentence(_PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], template))


# -------------------------------------------------------------------
# Proof points
# -------------------------------------------------------------------
@dataclass(frozen=True)
class ProofPoint:
    id: str
    title: str
    hook: str
    benefit: str


PROOF_POINTS: Dict[str, ProofPoint] = {
    "zkProofs": ProofPoint(
        id="zkProofs",
        title="ZK-Verified Tally",
        hook="Confirms results in under three seconds without exposing individual choices.",
        benefit="Instant assurance for stakeholders while ballots stay secret.",
    ),
    "immutableAuditTrail": ProofPoint(
        id="immutableAuditTrail",
        title="Immutable Audit Trail",
        hook="Tamper-evident records regulators can rely on the moment a decision closes.",
        benefit="Dispute cycles disappear and audit turnaround drops from weeks to minutes.",
    ),
    "sybilIdentity": ProofPoint(
        id="sybilIdentity",
        title="Sybil-Resistant Identity",
        hook="Blocks duplicate or impersonated votes without collecting personal data.",
        benefit="Decision integrity holds across distributed teams and outside collaborators.",
    ),
    "costPerTrust": ProofPoint(
        id="costPerTrust",
        title="Cost-Per-Trust Metric",
        hook="Cuts dispute resolution and verification spend by up to 92%.",
        benefit="Governance becomes a measurable ROI driver instead of a compliance expense.",
    ),
}

# (keywords, preferred proof points); first matching category wins
PROOF_POINT_RULES: Tuple[Tuple[Tuple[str, ...], Tuple[str, str]], ...] = (
    (("risk", "compliance", "audit"), ("immutableAuditTrail", "zkProofs")),
    (("speed", "latency", "delay"), ("zkProofs", "costPerTrust")),
    (("trust", "stakeholder", "transparency"), ("immutableAuditTrail", "sybilIdentity")),
    (("fraud", "identity"), ("sybilIdentity", "zkProofs")),
)

MAX_PROOF_POINTS = 3


# -------------------------------------------------------------------
# Profiles
# -------------------------------------------------------------------
@dataclass(frozen=True)
class QuestionTemplate:
    prompt: str
    options: Tuple[str, ...]


@dataclass(frozen=True)
class NarrativeTemplate:
    vessel: str            # Investor Memo | Case Study | Internal Strategic Report | Regulatory Submission
    dramatic_engine: str   # Crisis Averted | Opportunity Seized | Legacy Transformed
    summary: str
    implementation: Tuple[str, ...]
    technical: Tuple[str, ...]
    outcomes: Tuple[str, ...]
    next_steps: Tuple[str, ...]


@dataclass(frozen=True)
class IndustryProfile:
    id: str
    label: str
    aliases: Tuple[str, ...]
    default_goal: str
    proof_points: Tuple[str, ...]
    questions: Tuple[QuestionTemplate, ...]
    narrative: NarrativeTemplate


INDUSTRY_PROFILES: Tuple[IndustryProfile, ...] = (
    IndustryProfile(
        id="corporate-governance",
        label="Corporate Governance & Board Decisions",
        aliases=("Corporate Governance", "Board Decisions"),
        default_goal="accelerate confident board-level outcomes",
        proof_points=("immutableAuditTrail", "zkProofs", "costPerTrust"),
        questions=(
            QuestionTemplate(
                "Where does your board struggle most to present verifiable evidence today?",
                (
                    "Pre-read packs rarely show where cited data came from",
                    "Minutes and resolutions sit where auditors cannot reach them quickly",
                    "Committee updates arrive without proof delegated actions were completed",
                    "Shareholder communications cite metrics with no trace to source systems",
                    "Interim approvals happen over email with no immutable record",
                    "There is no single system of record for board votes and outcomes",
                ),
            ),
            QuestionTemplate(
                "How are sensitive votes executed across your governance structure today?",
                (
                    "Formal meetings with paper ballots or hand counts",
                    "Email surveys tallied manually after the meeting",
                    "Video calls with verbal roll calls",
                    "Delegated committees decide and simply report outcomes",
                    "Directors send votes individually to the chair or secretary",
                    "A legacy board portal with limited verification features",
                ),
            ),
            QuestionTemplate(
                "Which stakeholder demand puts the most pressure on your governance cadence?",
                (
                    "Regulators expect auditable controls around every strategic vote",
                    "Investors want line-of-sight from decision to action",
                    "Employees want clarity on how leadership decisions affect them",
                    "ESG and community stakeholders expect transparent reporting",
                    "Partners need proof that delegated authority is used responsibly",
                    "The board wants faster reconciliation of outcomes against commitments",
                ),
            ),
            QuestionTemplate(
                "How do you reconcile decisions taken between formal board sessions?",
                (
                    "Ad-hoc approvals via email or chat with no shared ledger",
                    "Special committees meet, but documentation lags by weeks",
                    "Interim votes are re-documented after the fact",
                    "Off-cycle resolutions live in spreadsheets with weak access control",
                    "Executives brief the board verbally with no digital trail",
                    "Directors rely on personal notes for rationale and actions",
                ),
            ),
            QuestionTemplate(
                "What change would be the biggest governance win for {INDUSTRY} this quarter?",
                (
                    "Real-time quorum tracking and proofs the moment votes close",
                    "Automated resolution distribution to investors and regulators",
                    "Digital audit packs for every board and committee decision",
                    "Delegated authority logs linking actions to accountable owners",
                    "Early alerts when governance bottlenecks threaten board promises",
                    "Dashboards that quantify trust and compliance improvements",
                ),
            ),
        ),
        narrative=NarrativeTemplate(
            vessel="Internal Strategic Report",
            dramatic_engine="Opportunity Seized",
            summary=(
                "{ROLE} within {INDUSTRY} is under pressure to turn governance from a {PAIN} headache "
                "into a strategic differentiator. DeVOTE backs every resolution with mathematical proof."
            ),
            implementation=(
                "Stand up verifiable voting for every {INDUSTRY} board and committee decision.",
                "Connect resolution workflows to zero-knowledge verification that neutralizes {PAIN}.",
                "Issue immutable audit packets to investors and regulators minutes after each vote.",
                "Give directors a trust scoreboard showing how fast commitments become accountable actions.",
            ),
            technical=(
                "The DeVOTE ledger anchors board, committee and delegated votes with zk-proof verification.",
                "Role-based access and sybil-resistant identity enforce who can propose, debate and decide.",
                "Connectors sync artefacts to existing board portals and compliance archives without migration.",
            ),
            outcomes=(
                "Board resolutions move from draft to verifiable action in under 48 hours.",
                "Stakeholders see a living audit log instead of retroactive minutes, despite {PAIN}.",
                "Directors spend meeting time on strategy, not on reconciling what was approved.",
            ),
            next_steps=(
                "Pilot with one board committee and measure time-to-proof for key resolutions.",
                "Codify governance playbooks so delegated authority is transparent and enforceable.",
                "Roll out immutable resolution packets to investors, regulators and operations.",
                "Extend dashboards to quantify trust, compliance and execution velocity.",
            ),
        ),
    ),
    IndustryProfile(
        id="healthcare-clinical",
        label="Healthcare & Clinical Research",
        aliases=("Healthcare", "Clinical Research"),
        default_goal="protect trial integrity while accelerating approvals",
        proof_points=("zkProofs", "sybilIdentity", "immutableAuditTrail"),
        questions=(
            QuestionTemplate(
                "Which part of your research lifecycle most urgently needs verifiable governance?",
                (
                    "Protocol amendments and investigator approvals",
                    "Patient consent capture and revocation tracking",
                    "Data access requests across partner institutions",
                    "Safety signal adjudication committees",
                    "Institutional Review Board decisions",
                    "Funding disbursements tied to milestones",
                ),
            ),
            QuestionTemplate(
                "How do collaborators attest to their compliance duties today?",
                (
                    "Email trails stored in shared drives",
                    "eSignature tools with no link to source data",
                    "Trial management notes with limited auditability",
                    "Weekly checkpoints documented in slide decks",
                    "Risk logs updated after monitoring visits",
                    "Regulator updates typed into static PDFs",
                ),
            ),
            QuestionTemplate(
                "Where would zero-knowledge verification neutralize stakeholder skepticism?",
                (
                    "Proving randomization logic without exposing cohorts",
                    "Showing consent withdrawals propagate instantly",
                    "Demonstrating custody of temperature-sensitive therapies",
                    "Confirming investigator conflicts were cleared",
                    "Proving data queries are closed within SLA",
                    "Reassuring sponsors that outsourced sites follow protocol",
                ),
            ),
            QuestionTemplate(
                "Which scenario causes the most painful delays when evidence is challenged?",
                (
                    "Safety boards pausing enrollment until records reconcile",
                    "Regulators asking for provenance of data transformations",
                    "Sponsors disputing whether milestones were met",
                    "Monitors escalating inconsistent consent statuses",
                    "Investigators contesting committee vote outcomes",
                    "Partners questioning access controls on shared data",
                ),
            ),
            QuestionTemplate(
                "If one trust signal for {INDUSTRY} could be automated, what should it measure?",
                (
                    "Every protocol deviation triggered the required review",
                    "Immutable chain-of-custody for trial data sets",
                    "Enrollment stats signed by authorized investigators",
                    "Transparent adjudication logs for adverse events",
                    "Sponsor dashboards of compliance KPIs by site",
                    "Time-to-proof for submissions and amendments",
                ),
            ),
        ),
        narrative=NarrativeTemplate(
            vessel="Regulatory Submission",
            dramatic_engine="Crisis Averted",
            summary=(
                "{INDUSTRY} teams face growing scrutiny over data integrity and investigator accountability. "
                "DeVOTE proves every action in the research lifecycle without exposing patient information."
            ),
            implementation=(
                "Give protocol approvals, deviations and closures instant mathematical proof.",
                "Replace manual attestations with zk-backed workflows that eliminate {PAIN}.",
                "Tie investigator actions, consent and regulatory reporting to one audit fabric.",
                "Show sponsors and regulators live trust metrics on shared dashboards.",
            ),
            technical=(
                "Zero-knowledge proofs confirm trial events while preserving blinding and confidentiality.",
                "Sybil-resistant identity keeps investigators, CROs and regulators inside their mandate.",
                "The ledger plugs into CTMS, eConsent and safety tools through lightweight adapters.",
            ),
            outcomes=(
                "Audit cycles shrink from months to days because evidence is assembled continuously.",
                "{ROLE} can demonstrate integrity even under emergency regulatory review.",
                "Enrollment and protocol approvals accelerate once trust objections disappear.",
            ),
            next_steps=(
                "Bind protocol decisions for one high-visibility study to DeVOTE verification.",
                "Automate consent, deviation and safety attestations with cryptographic proofs.",
                "Open regulator and sponsor dashboards with live compliance metrics.",
                "Scale to remaining trials once cycle-time reductions are quantified.",
            ),
        ),
    ),
    IndustryProfile(
        id="education-research",
        label="Education & Academic Research",
        aliases=("Education", "Academic Research"),
        default_goal="strengthen academic integrity across distributed collaborators",
        proof_points=("sybilIdentity", "immutableAuditTrail", "zkProofs"),
        questions=(
            QuestionTemplate(
                "Where does academic governance break down most often?",
                (
                    "Grant committees defending awarding decisions",
                    "Ethics boards handling conflict-of-interest disclosures",
                    "Curriculum councils tracking vote history",
                    "Faculty senate resolutions without a source of truth",
                    "Research collaborations needing authorship logs",
                    "Student governance bodies proving fair representation",
                ),
            ),
            QuestionTemplate(
                "How are votes gathered across campuses or partner institutions?",
                (
                    "Email or chat threads run by an administrator",
                    "Legacy voting tools with weak access control",
                    "Live meetings that exclude other time zones",
                    "Polling software without durable audit trails",
                    "Paper ballots with manual transcription",
                    "Processes that vary by department",
                ),
            ),
            QuestionTemplate(
                "What do stakeholders need before they trust a decision outcome?",
                (
                    "Proof that only eligible faculty took part",
                    "Evidence that conflicts were declared and handled",
                    "Chain-of-custody for research data contributions",
                    "Instant totals without exposing individual votes",
                    "Audit records for accreditation bodies",
                    "Live visibility for affected students and partners",
                ),
            ),
            QuestionTemplate(
                "Which governance backlog would you clear first if trust were automated?",
                (
                    "Grant awards waiting on multi-department sign-off",
                    "Curriculum changes delayed by quorum checks",
                    "Research agreements stalled in compliance review",
                    "Senate motions looping through clarifications",
                    "Student representation disputes",
                    "Authorship disputes over shared outputs",
                ),
            ),
            QuestionTemplate(
                "How should {INDUSTRY} measure success once trust infrastructure is in place?",
                (
                    "Time-to-approval for grants and policy changes",
                    "Participation rates across campuses",
                    "Speed of accreditation and compliance clearance",
                    "Transparency scores from public decision ledgers",
                    "Time to resolve disputes over shared research",
                    "Savings from retiring manual reconciliation",
                ),
            ),
        ),
        narrative=NarrativeTemplate(
            vessel="Case Study",
            dramatic_engine="Legacy Transformed",
            summary=(
                "{INDUSTRY} leaders juggle hybrid campuses, shared grants and public accountability. "
                "DeVOTE modernizes academic governance so every decision is provably fair."
            ),
            implementation=(
                "Replace ad-hoc voting and authorship tracking with verifiable digital ledgers.",
                "Address {PAIN} by binding committee work and resource allocation to cryptographic proof.",
                "Open remote participation without sacrificing eligibility or confidentiality.",
                "Publish outcomes that satisfy faculty, students and funders alike.",
            ),
            technical=(
                "Sybil-resistant identity confirms eligibility while keeping sensitive votes anonymous.",
                "Immutable audit trails keep faculty, student and research decisions on one timeline.",
                "Zero-knowledge proofs publish totals instantly while shielding individual selections.",
            ),
            outcomes=(
                "Policy changes reach adoption weeks faster because {ROLE} no longer reconciles scattered records.",
                "Committees hand regulators live access to authenticated decisions.",
                "Students and collaborators trust outcomes because every step is verifiable.",
            ),
            next_steps=(
                "Move one flagship committee or senate process into DeVOTE.",
                "Roll out verifiable identity for faculty, students and reviewers.",
                "Publish dashboards blending governance, funding and integrity signals.",
                "Extend to research consortia once internal adoption is proven.",
            ),
        ),
    ),
    IndustryProfile(
        id="public-sector",
        label="Government & Public Sector",
        aliases=("Government", "Public Sector"),
        default_goal="deliver provable transparency to citizens and oversight bodies",
        proof_points=("immutableAuditTrail", "zkProofs", "sybilIdentity"),
        questions=(
            QuestionTemplate(
                "Which civic decision process most needs tamper-proof verification?",
                (
                    "Budget appropriations and amendments",
                    "Procurement awards and vendor evaluations",
                    "Policy consultations and stakeholder ballots",
                    "Emergency response authorizations",
                    "Inter-agency data sharing agreements",
                    "Citizen assemblies or participatory budgeting",
                ),
            ),
            QuestionTemplate(
                "Where do transparency commitments collide with bureaucratic reality?",
                (
                    "Publishing audit-ready records on mandated timelines",
                    "Proving only eligible officials contributed",
                    "Answering records requests without redaction errors",
                    "Explaining procurement scoring to losing bidders",
                    "Tracking conditions attached to grants",
                    "Coordinating cross-agency approvals",
                ),
            ),
            QuestionTemplate(
                "Which stakeholder group is pushing hardest for verifiable proof?",
                (
                    "Legislative oversight committees",
                    "Inspectors general and auditors",
                    "Communities affected by decisions",
                    "Vendors seeking fair treatment",
                    "Advocacy groups demanding accountability",
                    "International partners tracking compliance",
                ),
            ),
            QuestionTemplate(
                "What stops leadership from acting quickly when evidence is incomplete?",
                (
                    "Manual reconciliation across document repositories",
                    "Unclear chain of command for emergency authorizations",
                    "Fragmented voting with no single tally source",
                    "Litigation risk from inconsistent documentation",
                    "Difficulty proving citizen feedback was considered",
                    "Data-sharing friction between jurisdictions",
                ),
            ),
            QuestionTemplate(
                "Which weekly trust signal for {INDUSTRY} would reassure citizens most?",
                (
                    "Ledger of funds allocated against funds authorized",
                    "Proof procurement scoring matched published criteria",
                    "How public input changed policy wording",
                    "Live status of compliance tasks tied to legislation",
                    "Signed cross-agency agreement tracker",
                    "Dispute resolution time falling each quarter",
                ),
            ),
        ),
        narrative=NarrativeTemplate(
            vessel="Internal Strategic Report",
            dramatic_engine="Crisis Averted",
            summary=(
                "{INDUSTRY} leaders face a trust deficit amplified by {PAIN}. DeVOTE replaces fragmented "
                "records with verifiable transparency so scrutiny becomes an asset."
            ),
            implementation=(
                "Anchor budget, procurement and policy workflows in zero-knowledge verification.",
                "Give auditors, oversight boards and citizens one tamper-proof audit trail.",
                "Neutralize {PAIN} by proving chain of command and eligibility without slowing action.",
                "Automate weekly transparency briefings with outcomes and proof side by side.",
            ),
            technical=(
                "Cryptographic attestations capture every approval, amendment and transfer of authority.",
                "Fine-grained access control keeps sensitive data private while the proof is published.",
                "Connectors sync with budgeting, procurement and case systems to avoid double entry.",
            ),
            outcomes=(
                "Oversight bodies close findings faster because evidence is real-time.",
                "Citizens regain confidence knowing {ROLE} can present proof without delay.",
                "Programs scale across agencies because the trust model is standardized.",
            ),
            next_steps=(
                "Pick a flagship procurement or budgeting process as the transparency pilot.",
                "Integrate DeVOTE proofs with existing public reporting portals.",
                "Train auditors to rely on cryptographic evidence instead of manual sampling.",
                "Extend to emergency response and inter-agency agreements as trust metrics rise.",
            ),
        ),
    ),
    IndustryProfile(
        id="supply-chain",
        label="Supply Chain & Regulatory Compliance",
        aliases=("Supply Chain", "Regulatory Compliance"),
        default_goal="prove chain-of-custody and compliance without slowing throughput",
        proof_points=("immutableAuditTrail", "sybilIdentity", "costPerTrust"),
        questions=(
            QuestionTemplate(
                "Where is chain-of-custody visibility weakest today?",
                (
                    "Supplier onboarding and due diligence",
                    "Batch release approvals across manufacturers",
                    "Hand-offs between carriers or regions",
                    "Quality escalations and deviation management",
                    "Regulatory filings tied to product movement",
                    "Recall coordination with downstream partners",
                ),
            ),
            QuestionTemplate(
                "Which compliance regime creates the most repetitive audit work?",
                (
                    "Pharmaceutical regulation (FDA / EMA)",
                    "Customs and import/export controls",
                    "ESG reporting",
                    "Critical infrastructure or defense compliance",
                    "ISO or sector quality certifications",
                    "Regional data residency and privacy rules",
                ),
            ),
            QuestionTemplate(
                "What evidence do customers or regulators struggle to verify quickly?",
                (
                    "Origin of ethically sourced materials",
                    "Cold-chain temperature logs",
                    "Subcontractors following restricted process steps",
                    "Identities of people signing releases",
                    "Remediation after an inspection finding",
                    "Lifecycle records for safety-critical parts",
                ),
            ),
            QuestionTemplate(
                "When {PAIN} strikes, which team scrambles the most?",
                (
                    "Quality and compliance chasing paper signatures",
                    "Operations re-validating partner attestations",
                    "Regulatory affairs assembling audit packets",
                    "Customer success explaining delays without data",
                    "Finance modelling liability without reliable signals",
                    "Legal preparing disclosures from partial records",
                ),
            ),
            QuestionTemplate(
                "Which proof signal would change partner and regulator confidence overnight?",
                (
                    "Immutable release certificates on every shipment",
                    "Live dashboards showing zero open deviations",
                    "Supplier scorecards built on signed attestations",
                    "Dispute timelines cut by automated evidence packs",
                    "Customer provenance portals with selective disclosure",
                    "Alerts when trust metrics fall below threshold",
                ),
            ),
        ),
        narrative=NarrativeTemplate(
            vessel="Case Study",
            dramatic_engine="Opportunity Seized",
            summary=(
                "{INDUSTRY} networks win when partners can verify every hand-off. DeVOTE puts proof into "
                "supply chain decisions so compliance stops slowing fulfillment."
            ),
            implementation=(
                "Bind onboarding, production, logistics and remediation to a shared trust ledger.",
                "Turn {PAIN} from a manual scramble into an automated alert and resolution cycle.",
                "Show regulators and customers the same authenticated evidence partners use internally.",
                "Track trust as an operational KPI that predicts throughput and margin.",
            ),
            technical=(
                "Sybil-resistant identity ensures only authorized partners sign critical steps.",
                "Immutable audit trails attach to ERP, MES and QMS records without duplication.",
                "Cost-per-trust analytics show savings from disputes resolved early.",
            ),
            outcomes=(
                "Audit preparation collapses because evidence is generated continuously.",
                "Customers and regulators receive proactive proof, not apologies for {PAIN}.",
                "The partner ecosystem grows because transparency is now an advantage.",
            ),
            next_steps=(
                "Instrument one lane or product line with DeVOTE-backed attestations.",
                "Automate compliance packets for the highest-risk regulation.",
                "Roll out trust dashboards to suppliers, carriers and customer teams.",
                "Re-invest cost-per-trust savings into partner enablement.",
            ),
        ),
    ),
    IndustryProfile(
        id="market-research",
        label="Market Research & Stakeholder Polling",
        aliases=("Market Research", "Stakeholder Polling"),
        default_goal="produce defensible insights stakeholders act on immediately",
        proof_points=("zkProofs", "sybilIdentity", "costPerTrust"),
        questions=(
            QuestionTemplate(
                "Which audience do you most need to convince with verifiable research?",
                (
                    "Executives making investment decisions",
                    "Regulators assessing sentiment or risk",
                    "Customers judging product-market fit",
                    "Employees weighing organizational change",
                    "Investors or donors validating impact",
                    "Communities affected by policy decisions",
                ),
            ),
            QuestionTemplate(
                "Which integrity risk undermines confidence in your findings?",
                (
                    "Duplicate or fake respondents skewing samples",
                    "No traceable consent for collected data",
                    "Slow field-to-insight cycles",
                    "Methodology skeptics you cannot satisfy",
                    "Regional rules complicating compliance",
                    "Manual merging of qualitative and quantitative data",
                ),
            ),
            QuestionTemplate(
                "How are stakeholders briefed on research outcomes today?",
                (
                    "Slide decks with topline metrics",
                    "Static PDFs with sampling notes in appendices",
                    "Live readouts with little time for validation",
                    "Dashboards without authenticated source data",
                    "Email digests linking to shared folders",
                    "Informal conversations without documentation",
                ),
            ),
            QuestionTemplate(
                "Which signal would prove your insights are trustworthy enough to act on?",
                (
                    "Every respondent was eligible and unique",
                    "Chain-of-custody from raw data to insight",
                    "Confidence intervals backed by attestations",
                    "Drill-down into verified segments",
                    "Decisions traced back to research findings",
                    "Alerts when sampling integrity drops",
                ),
            ),
            QuestionTemplate(
                "Once proof is automated, where will the saved capacity go?",
                (
                    "More frequent pulse surveys without new headcount",
                    "Reaching underrepresented voices",
                    "Advanced analytics and scenario modelling",
                    "Co-creating programs with stakeholders",
                    "Insight portals for partners and regulators",
                    "Longitudinal studies that compound value",
                ),
            ),
        ),
        narrative=NarrativeTemplate(
            vessel="Investor Memo",
            dramatic_engine="Opportunity Seized",
            summary=(
                "{INDUSTRY} teams need stakeholders to act fast on trustworthy data. DeVOTE hardens research "
                "integrity so insights convert to decisions without protest."
            ),
            implementation=(
                "Bind sampling, consent and analysis workflows to verifiable identity and proof.",
                "Eliminate {PAIN} by making every respondent touchpoint a signed, auditable event.",
                "Deliver insight dashboards that carry the proof alongside the story.",
                "Measure how quickly insights trigger policy, product or funding moves.",
            ),
            technical=(
                "ZK-verified tallies validate samples instantly while responses stay private.",
                "Sybil-resistant identity blocks inauthentic participation across channels.",
                "Cost-per-trust analytics show how proof-driven insight reduces churn and delay.",
            ),
            outcomes=(
                "Decision cycles shorten because evidence travels with the insight.",
                "Research teams stop firefighting validation and reinvest in experiments despite {PAIN}.",
                "Trust metrics become board-level KPIs that justify insight investment.",
            ),
            next_steps=(
                "Run one flagship study with DeVOTE proof from sampling to readout.",
                "Share proof-backed dashboards with the most skeptical stakeholder group.",
                "Track actions triggered by insights automatically.",
                "Standardize the proof model across all research programs.",
            ),
        ),
    ),
)


def find_industry_profile(label: str) -> Optional[IndustryProfile]:
    """
    Exact match on label/aliases first, then substring match in either direction.
    Matching is case-insensitive.
    """
    normalised = (label or "").strip().lower()
    if not normalised:
        return None

    for profile in INDUSTRY_PROFILES:
        candidates = (profile.label,) + profile.aliases
        if any(c.strip().lower() == normalised for c in candidates):
            return profile

    for profile in INDUSTRY_PROFILES:
        candidates = (profile.label,) + profile.aliases
        for c in candidates:
            cand = c.strip().lower()
            if cand in normalised or normalised in cand:
                return profile

    return None


def pick_proof_points(defaults: Tuple[str, ...], text: str) -> List[str]:
    """
    Preferred pair from the first matching keyword category, then the defaults.
    De-duplicated, capped at MAX_PROOF_POINTS.
    """
    low = (text or "").lower()
    preferred: Tuple[str, ...] = ()
    for keywords, pair in PROOF_POINT_RULES:
        if any(k in low for k in keywords):
            preferred = pair
            break

    merged = list(dict.fromkeys(preferred + tuple(defaults)))
    return merged[:MAX_PROOF_POINTS]
