import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database import get_db
from models import Audit
from schemas import AuditCreate, AuditResponse, AuditSummary, RecommendationReport
from services.platform_detection import detect_wordpress_plugins, get_page_builder_optimizations
from services.recommendation_service import build_recommendation_cards, build_recommendations, enhance_recommendation
from services.summary_service import generate_audit_summary

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_audit_or_404(audit_id: int, db: Session) -> Audit:
    audit = db.query(Audit).filter(Audit.id == audit_id).first()
    if not audit:
        raise HTTPException(status_code=404, detail="Audit not found")
    return audit


@router.post("/", response_model=AuditResponse, status_code=201)
def create_audit(audit: AuditCreate, db: Session = Depends(get_db)):
    """Store audit results submitted by the crawler"""
    cms = audit.cms
    page_builder = audit.page_builder
    detected_plugins = list(audit.detected_plugins)

    # Reject findings that could never be turned into recommendations
    try:
        for finding in audit.findings:
            enhance_recommendation(finding)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid finding: {e}")

    # Fill in the platform from the page markup when the crawler didn't
    if audit.html and not cms:
        detection = detect_wordpress_plugins(audit.html)
        cms = detection.cms
        page_builder = page_builder or detection.page_builder
        detected_plugins = detected_plugins or detection.plugins

    db_audit = Audit(
        website_url=audit.website_url,
        status="completed",
        cms=cms,
        page_builder=page_builder,
        detected_plugins=detected_plugins,
        desktop_score=audit.desktop_score,
        mobile_score=audit.mobile_score,
        findings=audit.findings,
        technical_issues=audit.technical_issues.model_dump(),
        results=audit.results,
    )
    db.add(db_audit)
    db.commit()
    db.refresh(db_audit)

    logger.info("Stored audit %s for %s (cms: %s)", db_audit.id, db_audit.website_url, cms or "unknown")
    return db_audit


@router.get("/{audit_id}", response_model=AuditResponse)
def get_audit(audit_id: int, db: Session = Depends(get_db)):
    """Get audit by ID"""
    return _get_audit_or_404(audit_id, db)


@router.get("/", response_model=List[AuditResponse])
def list_audits(
    skip: int = 0,
    limit: int = 100,
    status: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """List all audits with optional filtering"""
    query = db.query(Audit)
    if status:
        query = query.filter(Audit.status == status)
    return query.order_by(Audit.created_at.desc(), Audit.id.desc()).offset(skip).limit(limit).all()


@router.delete("/{audit_id}")
def delete_audit(audit_id: int, db: Session = Depends(get_db)):
    """Delete an audit"""
    audit = _get_audit_or_404(audit_id, db)
    db.delete(audit)
    db.commit()
    return {"message": "Audit deleted successfully"}


@router.get("/{audit_id}/recommendations", response_model=RecommendationReport)
def get_audit_recommendations(audit_id: int, db: Session = Depends(get_db)):
    """Ranked, CMS-aware recommendations for a stored audit"""
    audit = _get_audit_or_404(audit_id, db)
    detected_plugins = audit.detected_plugins or []

    try:
        recommendations = build_recommendations(
            audit.findings or [],
            audit.technical_issues or {},
            cms=audit.cms,
            detected_plugins=detected_plugins,
            page_builder=audit.page_builder,
        )
    except ValueError as e:
        logger.error("Invalid stored findings for audit %s: %s", audit_id, e)
        raise HTTPException(status_code=400, detail=f"Invalid stored findings: {e}")

    return RecommendationReport(
        recommendations=build_recommendation_cards(recommendations, audit.cms, detected_plugins),
        cms=audit.cms,
        page_builder=audit.page_builder,
        page_builder_optimizations=get_page_builder_optimizations(audit.page_builder),
        detected_plugins=detected_plugins,
    )


@router.get("/{audit_id}/summary", response_model=AuditSummary)
def get_audit_summary(audit_id: int, db: Session = Depends(get_db)):
    """Prioritized summary across all audit sections"""
    audit = _get_audit_or_404(audit_id, db)
    try:
        return generate_audit_summary(audit.results or {})
    except Exception as e:
        logger.exception("Error generating summary for audit %s", audit_id)
        raise HTTPException(status_code=500, detail=f"Failed to generate summary: {str(e)}")
