"""
Textes et helpers pour le menu vidéo (`/video`).
"""
from __future__ import annotations

def lbl_add_to_playlist() -> str: return "Ajouter à la playlist"
def lbl_open_channel() -> str: return "Ouvrir la chaîne"
def lbl_subscribe() -> str: return "S'abonner"
def lbl_unsubscribe() -> str: return "Se désabonner"
def lbl_not_interested() -> str: return "Pas intéressé"
def lbl_share() -> str: return "Partager"
def lbl_close() -> str: return "Fermer"

def msg_signed_users_only() -> str: return "Réservé aux utilisateurs connectés. Utilisez /video connexion."
def msg_subscribed() -> str: return "Abonné à la chaîne."
def msg_unsubscribed() -> str: return "Désabonné de la chaîne."
def msg_not_interested_done() -> str: return "Cette vidéo ne vous sera plus proposée."
def msg_menu_closed() -> str: return "Menu fermé."
def msg_db_missing() -> str: return "DB non configurée."
def msg_video_introuvable(video_id: str) -> str: return f"Vidéo introuvable: `{video_id}`"
def msg_video_non_lisible(video_id: str) -> str: return f"Vidéo non lisible: `{video_id}`"
def msg_catalogue_erreur() -> str: return "Echec de lecture du catalogue."
def msg_connecte() -> str: return "Compte lié : vous êtes connecté."
def msg_deconnecte(was_linked: bool) -> str: return "Compte délié." if was_linked else "Aucun compte lié."
def msg_playlist_creee(title: str) -> str: return f"Playlist créée: {title}"
def msg_playlist_existe(title: str) -> str: return f"Playlist déjà existante: {title}"
def msg_titre_invalide() -> str: return "Titre invalide (1-100 caractères)."
def msg_video_ajoutee(video_id: str, title: str) -> str: return f"Vidéo enregistrée: {title} (`{video_id}`)"
def msg_channel_link(url: str) -> str: return f"Chaîne : {url}"
def msg_share_link(url: str) -> str: return f"Lien de partage : {url}"

def fmt_checklist_label(title: str, checked: bool) -> str:
    mark = "☑" if checked else "☐"
    return f"{mark} {title}"[:80]

__all__ = [name for name in globals().keys() if name.startswith(('lbl_', 'msg_', 'fmt_'))]
