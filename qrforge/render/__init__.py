"""Output renderers for encoded QR codes: PNG, SVG, PDF and terminal text."""