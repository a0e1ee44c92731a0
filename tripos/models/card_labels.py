"""
Share card labels per language.
"""
from pydantic import BaseModel

from .trip import Language


class CardLabels(BaseModel):
    """Fixed strings printed on the share card."""
    title: str
    subtitle: str
    highlights: str
    scan_to_view: str
    powered_by: str


CARD_LABELS: dict[Language, CardLabels] = {
    Language.EN: CardLabels(
        title="My Trip Plan",
        subtitle="AI-Powered Itinerary",
        highlights="Trip Highlights",
        scan_to_view="Scan to view full itinerary",
        powered_by="Planned by Trip OS AI",
    ),
    Language.ZH_TW: CardLabels(
        title="我的旅行計畫",
        subtitle="AI 智能規劃行程",
        highlights="行程亮點",
        scan_to_view="掃碼查看完整行程",
        powered_by="由 Trip OS AI 規劃",
    ),
    Language.ZH_CN: CardLabels(
        title="我的旅行计划",
        subtitle="AI 智能规划行程",
        highlights="行程亮点",
        scan_to_view="扫码查看完整行程",
        powered_by="由 Trip OS AI 规划",
    ),
    Language.JA: CardLabels(
        title="旅行プラン",
        subtitle="AI旅程プランナー",
        highlights="ハイライト",
        scan_to_view="QRコードで全行程を見る",
        powered_by="Trip OS AI で作成",
    ),
    Language.KO: CardLabels(
        title="나의 여행 계획",
        subtitle="AI 여행 플래너",
        highlights="하이라이트",
        scan_to_view="QR 코드로 전체 일정 보기",
        powered_by="Trip OS AI로 계획",
    ),
    Language.ES: CardLabels(
        title="Mi Plan de Viaje",
        subtitle="Itinerario con IA",
        highlights="Destacados",
        scan_to_view="Escanea para ver el itinerario",
        powered_by="Planificado por Trip OS AI",
    ),
    Language.FR: CardLabels(
        title="Mon Plan de Voyage",
        subtitle="Itinéraire IA",
        highlights="Points Forts",
        scan_to_view="Scannez pour voir l'itinéraire",
        powered_by="Planifié par Trip OS AI",
    ),
    Language.HI: CardLabels(
        title="मेरी यात्रा योजना",
        subtitle="AI यात्रा प्लानर",
        highlights="हाइलाइट्स",
        scan_to_view="पूरा कार्यक्रम देखने के लिए स्कैन करें",
        powered_by="Trip OS AI द्वारा योजनाबद्ध",
    ),
    Language.AR: CardLabels(
        title="خطة رحلتي",
        subtitle="مسار الذكاء الاصطناعي",
        highlights="أبرز المعالم",
        scan_to_view="امسح لعرض المسار الكامل",
        powered_by="مخطط بواسطة Trip OS AI",
    ),
    Language.PT: CardLabels(
        title="Meu Plano de Viagem",
        subtitle="Roteiro com IA",
        highlights="Destaques",
        scan_to_view="Escaneie para ver o roteiro",
        powered_by="Planejado por Trip OS AI",
    ),
    Language.RU: CardLabels(
        title="Мой План Путешествия",
        subtitle="AI-маршрут",
        highlights="Основное",
        scan_to_view="Сканируйте для просмотра маршрута",
        powered_by="Создано Trip OS AI",
    ),
}


def get_card_labels(language) -> CardLabels:
    """Labels for a language, falling back to English."""
    try:
        return CARD_LABELS[Language(language)]
    except ValueError:
        return CARD_LABELS[Language.EN]
